"""Facade over the five flows with optional history and usage recording."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel

from hr_assistant.clients.llm_client import DEFAULT_MODEL, LLMClient
from hr_assistant.config import AppConfig, PipelineConfig
from hr_assistant.errors import HRAssistantError
from hr_assistant.history.models import HistoryItem
from hr_assistant.history.store import HistoryStore
from hr_assistant.logging.cost_calculator import calculate_cost
from hr_assistant.logging.models import UsageLog
from hr_assistant.logging.usage_store import UsageStore
from hr_assistant.models.analysis import AnalysisRequest, AnalysisResult
from hr_assistant.models.chat import ChatRequest, ChatResponse
from hr_assistant.models.generation import (
    GenerationRequest,
    GenerationResult,
    RegenerationRequest,
)
from hr_assistant.models.parsing import ParseRequest, ParseResult
from hr_assistant.pipeline.analyzer import JDAnalyzer
from hr_assistant.pipeline.assistant import ChatAssistant
from hr_assistant.pipeline.file_parser import JDFileParser
from hr_assistant.pipeline.generator import JDGenerator
from hr_assistant.validation import validate

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _role_title(request: Any) -> str | None:
    if isinstance(request, BaseModel):
        return getattr(request, "role_title", None)
    if isinstance(request, Mapping):
        return request.get("roleTitle") or request.get("role_title")
    return None


class HRAssistant:
    """Runs the HR assistant flows.

    The flows themselves are stateless. When a ``history`` store is given,
    successful generate/regenerate results are saved to it; when a ``usage``
    store is given, every call (successful or not) is logged with its token
    usage and estimated cost.
    """

    def __init__(
        self,
        llm: LLMClient,
        *,
        model: str = DEFAULT_MODEL,
        pipeline: PipelineConfig | None = None,
        max_tokens: int = 4096,
        history: HistoryStore | None = None,
        usage: UsageStore | None = None,
        session_id: str = "anonymous",
    ):
        pipeline = pipeline or PipelineConfig()
        self.llm = llm
        self.model = model
        self.generator = JDGenerator(
            llm,
            model=model,
            temperature=pipeline.generation_temperature,
            regeneration_temperature=pipeline.regeneration_temperature,
            max_tokens=max_tokens,
        )
        self.analyzer = JDAnalyzer(
            llm, model=model, temperature=pipeline.analysis_temperature, max_tokens=max_tokens
        )
        self.file_parser = JDFileParser(
            llm, model=model, temperature=pipeline.parse_temperature, max_tokens=max_tokens
        )
        self.assistant = ChatAssistant(llm, model=model, temperature=pipeline.chat_temperature)
        self.history = history
        self.usage = usage
        self.session_id = session_id

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        llm: LLMClient | None = None,
        *,
        history: HistoryStore | None = None,
        usage: UsageStore | None = None,
    ) -> HRAssistant:
        if llm is None:
            llm = LLMClient(timeout=config.llm.timeout, max_retries=config.llm.max_retries)
        return cls(
            llm,
            model=config.llm.model,
            pipeline=config.pipeline,
            max_tokens=config.llm.max_tokens,
            history=history,
            usage=usage,
        )

    async def generate(
        self, request: GenerationRequest | Mapping[str, Any]
    ) -> GenerationResult:
        async def flow() -> GenerationResult:
            req = validate(GenerationRequest, request)
            result = await self.generator.generate(req)
            self._remember(req, result)
            return result

        return await self._run("generate", flow, job_title=_role_title(request))

    async def regenerate(
        self, request: RegenerationRequest | Mapping[str, Any]
    ) -> GenerationResult:
        async def flow() -> GenerationResult:
            req = validate(RegenerationRequest, request)
            result = await self.generator.regenerate(req)
            self._remember(req, result)
            return result

        return await self._run("regenerate", flow, job_title=_role_title(request))

    async def analyze(self, request: AnalysisRequest | Mapping[str, Any]) -> AnalysisResult:
        return await self._run("analyze", lambda: self.analyzer.analyze(request))

    async def parse_file(self, request: ParseRequest | Mapping[str, Any]) -> ParseResult:
        return await self._run("parse_file", lambda: self.file_parser.parse(request))

    async def chat(self, request: ChatRequest | Mapping[str, Any]) -> ChatResponse:
        return await self._run("chat", lambda: self.assistant.chat(request))

    def _remember(self, request: GenerationRequest, result: GenerationResult) -> None:
        if self.history is None:
            return
        item = self.history.add(
            HistoryItem(
                title=request.role_title,
                description=result.job_description,
                company_name=request.company_name,
            )
        )
        logger.debug("Saved job description %s to history", item.id)

    async def _run(
        self,
        mode: str,
        flow: Callable[[], Awaitable[T]],
        *,
        job_title: str | None = None,
    ) -> T:
        start = time.monotonic()
        try:
            result = await flow()
        except HRAssistantError as exc:
            logger.error("%s failed: %s: %s", mode, type(exc).__name__, exc)
            self._log_usage(mode, start, job_title, error=exc)
            raise
        self._log_usage(mode, start, job_title)
        return result

    def _log_usage(
        self,
        mode: str,
        start: float,
        job_title: str | None,
        error: Exception | None = None,
    ) -> None:
        # Always drain the token log; concurrent calls on one instance pool their tokens.
        tokens = self.llm.get_token_summary()
        if self.usage is None:
            return
        self.usage.save_log(
            UsageLog(
                session_id=self.session_id,
                mode=mode,
                model=self.model,
                job_title=job_title,
                elapsed_seconds=time.monotonic() - start,
                total_input_tokens=tokens["input"],
                total_output_tokens=tokens["output"],
                estimated_cost_usd=calculate_cost(tokens["calls"]),
                success=error is None,
                error_kind=type(error).__name__ if error else None,
                error_message=str(error) if error else None,
            )
        )
