"""Structured extraction from the raw text of a job description document."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hr_assistant.clients.llm_client import DEFAULT_MODEL, LLMClient
from hr_assistant.models.parsing import NOT_MENTIONED, ParseRequest, ParseResult
from hr_assistant.prompts import render
from hr_assistant.validation import validate

logger = logging.getLogger(__name__)


class JDFileParser:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def parse(self, request: ParseRequest | Mapping[str, Any]) -> ParseResult:
        """Extract the nine job posting fields from ``request.file_content``.

        Values the document does not state (and that cannot be inferred) come
        back as ``NOT_MENTIONED``.
        """
        request = validate(ParseRequest, request)
        logger.info("Parsing job description document (%d chars)", len(request.file_content))
        result = await self.llm.generate_structured(
            prompt=render("parse_file", request, not_mentioned=NOT_MENTIONED),
            output_model=ParseResult,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.debug(
            "Parsed %s: %d skills, %d responsibilities",
            result.job_title,
            len(result.required_skills),
            len(result.roles_and_responsibilities),
        )
        return result
