"""Claude API wrapper with async support and retry logic."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

import anthropic
from pydantic import BaseModel
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from hr_assistant.errors import UpstreamError, ValidationError
from hr_assistant.models.chat import ChatTurn
from hr_assistant.utils.json_parser import extract_json
from hr_assistant.validation import validate_reply

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

ModelT = TypeVar("ModelT", bound=BaseModel)

# Errors worth another attempt; everything else from the SDK fails immediately.
TRANSIENT_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)

# Provider role names for ChatTurn.role
_ROLE_MAP = {"user": "user", "model": "assistant"}


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


def _schema_hint(output_model: type[BaseModel]) -> str:
    schema = json.dumps(output_model.model_json_schema(by_alias=True), indent=2)
    return (
        "Respond ONLY with a single JSON object (no prose, no code fences) "
        f"that conforms to this JSON schema:\n{schema}"
    )


class LLMClient:
    """Async Claude API client with exponential-backoff retries."""

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int = 3,
    ):
        # Retries are handled by the tenacity loop in _call_api.
        kwargs: dict = {"max_retries": 0}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.max_retries = max(1, max_retries)
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    async def _call_api(
        self,
        messages: list[dict],
        system: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> anthropic.types.Message:
        """Make the actual API call, retrying transient provider errors."""
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": messages,
        }
        if system:
            kwargs["system"] = system
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(min=1, max=10),
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await self.client.messages.create(**kwargs)

    async def generate(
        self,
        prompt: str,
        system: str = "",
        history: Sequence[ChatTurn] | None = None,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> LLMResponse:
        """Send a prompt (after any prior turns) and return the text response with usage."""
        messages = [
            {"role": _ROLE_MAP[turn.role], "content": turn.content} for turn in history or ()
        ]
        messages.append({"role": "user", "content": prompt})

        logger.debug("LLM call: model=%s, turns=%d", model, len(messages))
        try:
            message = await self._call_api(
                messages=messages,
                system=system,
                model=model,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except anthropic.APIError as exc:
            logger.error("LLM call failed", exc_info=True)
            raise UpstreamError(f"LLM provider call failed: {exc}") from exc

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        return LLMResponse(
            text=message.content[0].text if message.content else "",
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    async def generate_json(
        self,
        prompt: str,
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> dict | list:
        """Send a prompt and parse JSON from the response."""
        response = await self.generate(
            prompt=prompt,
            system=system,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        try:
            return extract_json(response.text)
        except ValueError as exc:
            logger.warning("LLM reply is not JSON: %.200s", response.text)
            raise ValidationError("<reply>", "invalid", str(exc), source="reply") from exc

    async def generate_structured(
        self,
        prompt: str,
        output_model: type[ModelT],
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 4096,
    ) -> ModelT:
        """Send a prompt and return the reply validated against ``output_model``."""
        hint = _schema_hint(output_model)
        data = await self.generate_json(
            prompt=prompt,
            system=f"{system}\n\n{hint}" if system else hint,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return validate_reply(output_model, data)

    async def chat(
        self,
        message: str,
        history: Sequence[ChatTurn] = (),
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.5,
        max_tokens: int = 1024,
    ) -> str:
        """Continue a conversation and return the model's free-text reply."""
        response = await self.generate(
            prompt=message,
            system=system,
            history=history,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.text

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
