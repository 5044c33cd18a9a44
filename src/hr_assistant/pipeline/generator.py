"""Job description generation and regeneration flows."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hr_assistant.clients.llm_client import DEFAULT_MODEL, LLMClient
from hr_assistant.models.generation import (
    GenerationRequest,
    GenerationResult,
    RegenerationRequest,
)
from hr_assistant.prompts import render
from hr_assistant.validation import validate

logger = logging.getLogger(__name__)


class JDGenerator:
    """Writes job descriptions from the generation form fields."""

    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        regeneration_temperature: float = 0.9,
        max_tokens: int = 4096,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.regeneration_temperature = regeneration_temperature
        self.max_tokens = max_tokens

    async def generate(
        self, request: GenerationRequest | Mapping[str, Any]
    ) -> GenerationResult:
        """Generate a new job description."""
        request = validate(GenerationRequest, request)
        logger.info("Generating job description: %s at %s", request.role_title, request.company_name)
        return await self.llm.generate_structured(
            prompt=render("generate", request),
            output_model=GenerationResult,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    async def regenerate(
        self, request: RegenerationRequest | Mapping[str, Any]
    ) -> GenerationResult:
        """Rephrase a previously generated description without changing its meaning.

        Two calls with the same request are expected to return different text.
        """
        request = validate(RegenerationRequest, request)
        logger.info("Regenerating job description: %s", request.role_title)
        return await self.llm.generate_structured(
            prompt=render("regenerate", request),
            output_model=GenerationResult,
            model=self.model,
            temperature=self.regeneration_temperature,
            max_tokens=self.max_tokens,
        )
