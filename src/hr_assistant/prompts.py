"""Prompt templates and the renderer that fills them from request models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError
from jinja2.exceptions import UndefinedError
from pydantic import BaseModel

from hr_assistant.errors import TemplateError

GENERATE_TEMPLATE = """\
You are an expert HR assistant specializing in writing job descriptions.

Generate a compelling job description based on the details provided.

The output must be a single string. Use markdown-style headings (e.g. "## About the Company") \
for sections and bullet points (e.g. "- item") for the lists under "Key Responsibilities" \
and "Qualifications".

Company Name: {{ company_name }}
About Company: {{ about_company }}
Role Title: {{ role_title }}
Experience: {{ experience }}
Location: {{ location }}
Key Skills: {{ key_skills }}
Gender Preference: {{ gender_preference }}

Return the job description in the "jobDescription" field."""

REGENERATE_TEMPLATE = """\
You are an expert HR assistant, skilled at writing job descriptions.

You are given an existing job description. Rewrite it with slight variations in phrasing \
so the user gets some variety. Do not change its meaning, and keep the markdown-style \
headings ("## ...") and bullet points ("- ...").

Original Job Description:
---
{{ original_description }}
---

Company Name: {{ company_name }}
About Company: {{ about_company }}
Role Title: {{ role_title }}
Experience: {{ experience }}
Location: {{ location }}
Key Skills: {{ key_skills }}
Gender Preference: {{ gender_preference }}

Return the regenerated job description in the "jobDescription" field."""

ANALYZE_TEMPLATE = """\
You are an expert HR copywriter. Your task is to analyze a job description and improve it.

Analyze the following job description:
---
{{ job_description }}
---

Based on your analysis, provide:

1. structuredContent: the original job description converted into a well-structured \
markdown document. Use headings (e.g. "## Key Responsibilities") and bullet points for \
lists. It must be a single formatted string.
2. recommendations: actionable recommendations to improve the job description, focused \
on clarity, inclusivity and impact."""

PARSE_FILE_TEMPLATE = """\
You are an expert HR assistant. You have been given the raw text of a job description document.
Read it, understand it, extract the key information, then rephrase and structure it professionally.

Document content:
---
{{ file_content }}
---

Perform the following:
1. Clean up the text for clarity, grammar and formatting.
2. Extract the information into the requested fields.
3. For list fields (requiredSkills, rolesAndResponsibilities) put each item in its own string.
4. If Job Title, Experience or Skills are missing, infer them from context. \
If a value cannot be found or inferred, use exactly "{{ not_mentioned }}".
5. salaryPackage and location must be "{{ not_mentioned }}" when the document does not state them.
6. In otherInfo, add suggestions for missing but relevant points a professional job \
description usually includes (benefits, company culture, soft skills).
7. Keep the result concise and suitable for a job listing portal."""

CHAT_SYSTEM_PROMPT = """\
You are an AI HR Assistant chatbot. Your purpose is to help users of this application.

The application has the following features:
- Job Description Generation: users fill out a form with the role title, experience, \
location, skills and company details, and the AI generates a professional job description. \
A generated description can be regenerated for a differently phrased variant.
- Job Description Analysis: users paste an existing job description (at least 50 characters) \
and the AI restructures it and recommends improvements.
- Job Description Parsing: users upload a job description document and the AI extracts \
its company, title, experience, skills, responsibilities, salary and location.
- Job Description History: previously generated job descriptions are saved and can be viewed later.

Your personality is helpful, friendly and professional.

Common questions:
- "How do I generate a job description?": go to "Generate JD", fill in every field of the \
form and submit it with "Generate Description".
- "How can I improve my job description?": use "Analyze JD", paste the current description \
and read the feedback and recommendations.
- "Where are my old job descriptions?": all generated descriptions are stored under "History".
- "Can I import an existing document?": use "Parse JD" and upload a PDF, DOCX or text file.

Keep your answers concise and easy to understand."""

TEMPLATES: dict[str, str] = {
    "generate": GENERATE_TEMPLATE,
    "regenerate": REGENERATE_TEMPLATE,
    "analyze": ANALYZE_TEMPLATE,
    "parse_file": PARSE_FILE_TEMPLATE,
}

_env = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=True)


def _context(request: BaseModel | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(request, BaseModel):
        # mode="json" renders enums as their plain values
        return request.model_dump(mode="json")
    return dict(request)


def render(template_name: str, request: BaseModel | Mapping[str, Any], **extra: Any) -> str:
    """Render the named template with the fields of ``request``.

    Raises:
        TemplateError: unknown template, or a placeholder with no matching field.
    """
    source = TEMPLATES.get(template_name)
    if source is None:
        raise TemplateError(f"Unknown prompt template: {template_name}")
    context = _context(request)
    context.update(extra)
    try:
        return _env.from_string(source).render(**context)
    except UndefinedError as exc:
        raise TemplateError(f"Template '{template_name}': {exc.message}") from exc
    except TemplateSyntaxError as exc:
        raise TemplateError(f"Template '{template_name}' is malformed: {exc}") from exc
