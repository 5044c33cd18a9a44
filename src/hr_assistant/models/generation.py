"""Pydantic models for job description generation."""

from __future__ import annotations

import re
from enum import Enum

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

WIRE_CONFIG = {
    "alias_generator": to_camel,
    "populate_by_name": True,
    "str_strip_whitespace": True,
}

_HEADING = re.compile(r"^#{1,6} \S", re.MULTILINE)
_BULLET = re.compile(r"^\s*[-*] \S", re.MULTILINE)


class GenderPreference(str, Enum):
    MALE = "male"
    FEMALE = "female"
    BOTH = "both"


class GenerationRequest(BaseModel):
    role_title: str = Field(min_length=2)
    experience: str = Field(min_length=1)  # e.g. "2-5 years"
    location: str = Field(min_length=2)  # e.g. "Remote/Bangalore"
    key_skills: str = Field(min_length=2)  # comma-separated
    company_name: str = Field(min_length=1)
    about_company: str = Field(min_length=1)
    gender_preference: GenderPreference = Field(
        validation_alias=AliasChoices("genderPreference", "gender", "gender_preference"),
        serialization_alias="genderPreference",
    )

    model_config = WIRE_CONFIG


class RegenerationRequest(GenerationRequest):
    original_description: str = Field(min_length=1)


class GenerationResult(BaseModel):
    job_description: str = Field(min_length=1)

    model_config = WIRE_CONFIG

    @field_validator("job_description")
    @classmethod
    def _markdown_layout(cls, value: str) -> str:
        if not _HEADING.search(value):
            raise ValueError("must contain at least one markdown heading")
        if not _BULLET.search(value):
            raise ValueError("must contain at least one bullet point")
        return value
