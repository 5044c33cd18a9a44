"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from hr_assistant.clients.llm_client import LLMClient, LLMResponse
from hr_assistant.models.analysis import AnalysisResult
from hr_assistant.models.chat import ChatResponse
from hr_assistant.models.generation import GenerationResult
from hr_assistant.models.parsing import NOT_MENTIONED, ParseResult

SAMPLE_JOB_DESCRIPTION = """\
## About the Company
Acme Logistics builds routing software for mid-sized freight carriers.

## Key Responsibilities
- Design and maintain Python services for shipment tracking
- Own PostgreSQL schema changes and query performance

## Qualifications
- 3-5 years of backend development experience
- Strong Python and SQL skills
"""


def make_api_message(text: str, input_tokens: int = 100, output_tokens: int = 50) -> MagicMock:
    """Build a mock anthropic Message-like object."""
    message = MagicMock()
    message.usage.input_tokens = input_tokens
    message.usage.output_tokens = output_tokens
    message.content = [MagicMock(text=text)]
    return message


@pytest.fixture
def generation_form() -> dict:
    return {
        "roleTitle": "Backend Engineer",
        "experience": "3-5 years",
        "location": "Remote/Bangalore",
        "keySkills": "Python, PostgreSQL, Docker",
        "companyName": "Acme Logistics",
        "aboutCompany": "Acme Logistics builds routing software for freight carriers.",
        "genderPreference": "both",
    }


@pytest.fixture
def regeneration_form(generation_form) -> dict:
    return {**generation_form, "originalDescription": SAMPLE_JOB_DESCRIPTION}


@pytest.fixture
def sample_job_description() -> str:
    return SAMPLE_JOB_DESCRIPTION


@pytest.fixture
def parse_reply() -> dict:
    return {
        "companyName": "InnovateTech Solutions",
        "aboutCompany": "Provider of AI and machine learning solutions.",
        "jobTitle": "Senior Frontend Engineer",
        "requiredExperience": "5+ years",
        "requiredSkills": ["React", "TypeScript", "GraphQL"],
        "rolesAndResponsibilities": [
            "Develop and maintain user-facing features",
            "Build reusable code and libraries",
        ],
        "salaryPackage": NOT_MENTIONED,
        "location": "San Francisco, CA (Hybrid)",
        "otherInfo": "Consider listing benefits and team culture.",
    }


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    client.generate_structured = AsyncMock(
        return_value=GenerationResult(job_description=SAMPLE_JOB_DESCRIPTION)
    )
    client.chat = AsyncMock(return_value="Go to the Generate JD tab and fill in the form.")
    client.get_token_summary = MagicMock(return_value={"input": 0, "output": 0, "calls": []})
    return client


@pytest.fixture
def stub_llm():
    """Real LLMClient whose Anthropic SDK client replies with canned text.

    Call the fixture with the reply (a str, or a dict/list dumped as JSON);
    it returns ``(llm, create_mock)``.
    """

    def _make(reply, input_tokens: int = 100, output_tokens: int = 50):
        text = reply if isinstance(reply, str) else json.dumps(reply)
        with patch("hr_assistant.clients.llm_client.anthropic.AsyncAnthropic") as mock_cls:
            sdk = MagicMock()
            sdk.messages.create = AsyncMock(
                return_value=make_api_message(text, input_tokens, output_tokens)
            )
            mock_cls.return_value = sdk
            llm = LLMClient(max_retries=1)
        return llm, sdk.messages.create

    return _make


@pytest.fixture
def sample_results() -> dict:
    return {
        "generation": GenerationResult(job_description=SAMPLE_JOB_DESCRIPTION),
        "analysis": AnalysisResult(
            structured_content=SAMPLE_JOB_DESCRIPTION,
            recommendations="- Add a salary range\n- Use inclusive language",
        ),
        "chat": ChatResponse(response="Use the History tab."),
        "parse": ParseResult(
            company_name="Acme",
            about_company="Routing software",
            job_title="Backend Engineer",
            required_experience="3-5 years",
            required_skills=["Python"],
            roles_and_responsibilities=["Build services"],
            salary_package=NOT_MENTIONED,
            location="Remote",
            other_info="Add benefits",
        ),
    }
