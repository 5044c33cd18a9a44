"""Pydantic models for job description analysis."""

from __future__ import annotations

from pydantic import BaseModel, Field

from hr_assistant.models.generation import WIRE_CONFIG

MIN_ANALYSIS_LENGTH = 50


class AnalysisRequest(BaseModel):
    job_description: str = Field(min_length=MIN_ANALYSIS_LENGTH)

    model_config = WIRE_CONFIG


class AnalysisResult(BaseModel):
    structured_content: str = Field(min_length=1)  # markdown with headings and bullets
    recommendations: str = Field(min_length=1)

    model_config = WIRE_CONFIG
