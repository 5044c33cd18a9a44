"""Sample document used by the parse demo."""

SAMPLE_JOB_POSTING = """\
Company: InnovateTech Solutions
About: We are a leading provider of cutting-edge technology solutions, specializing in AI \
and machine learning. Our mission is to empower businesses with innovative tools to drive \
growth and efficiency.

Role: Senior Frontend Engineer
We are seeking a talented Senior Frontend Engineer to join our dynamic team. The ideal \
candidate will have a passion for creating beautiful and performant user interfaces.

Experience: 5+ years of professional frontend development experience.
Skills: React, TypeScript, GraphQL, Next.js, Webpack.
Package: $120,000 - $150,000 per year
Location: San Francisco, CA (Hybrid)
Responsibilities:
- Develop and maintain user-facing features.
- Build reusable code and libraries for future use.
- Ensure the technical feasibility of UI/UX designs.
- Optimize applications for maximum speed and scalability.
- Collaborate with other team members and stakeholders.
"""
