"""Pydantic models for parsing uploaded job description documents."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from hr_assistant.models.generation import WIRE_CONFIG

NOT_MENTIONED = "Not Mentioned"


class ParseRequest(BaseModel):
    file_content: str = Field(min_length=1)

    model_config = WIRE_CONFIG


class ParseResult(BaseModel):
    company_name: str
    about_company: str
    job_title: str
    required_experience: str
    required_skills: list[str] = Field(min_length=1)
    roles_and_responsibilities: list[str] = Field(min_length=1)
    salary_package: str
    location: str
    other_info: str

    model_config = WIRE_CONFIG

    @field_validator(
        "company_name",
        "about_company",
        "job_title",
        "required_experience",
        "salary_package",
        "location",
        "other_info",
    )
    @classmethod
    def _blank_is_not_mentioned(cls, value: str) -> str:
        return value or NOT_MENTIONED

    @field_validator("required_skills", "roles_and_responsibilities")
    @classmethod
    def _drop_blank_items(cls, items: list[str]) -> list[str]:
        cleaned = [item for item in items if item]
        if not cleaned:
            raise ValueError("must contain at least one non-blank item")
        return cleaned
