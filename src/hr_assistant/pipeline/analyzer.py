"""Job description analysis flow."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hr_assistant.clients.llm_client import DEFAULT_MODEL, LLMClient
from hr_assistant.models.analysis import AnalysisRequest, AnalysisResult
from hr_assistant.prompts import render
from hr_assistant.validation import validate

logger = logging.getLogger(__name__)


class JDAnalyzer:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.3,
        max_tokens: int = 4096,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def analyze(self, request: AnalysisRequest | Mapping[str, Any]) -> AnalysisResult:
        """Restructure a job description and recommend improvements.

        Descriptions under 50 characters are rejected before the LLM is called.
        """
        request = validate(AnalysisRequest, request)
        logger.info("Analyzing job description (%d chars)", len(request.job_description))
        return await self.llm.generate_structured(
            prompt=render("analyze", request),
            output_model=AnalysisResult,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
