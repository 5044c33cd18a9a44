"""Support chatbot flow."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from hr_assistant.clients.llm_client import DEFAULT_MODEL, LLMClient
from hr_assistant.models.chat import ChatRequest, ChatResponse
from hr_assistant.prompts import CHAT_SYSTEM_PROMPT
from hr_assistant.validation import validate, validate_reply

logger = logging.getLogger(__name__)


class ChatAssistant:
    def __init__(
        self,
        llm: LLMClient,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.5,
        max_tokens: int = 1024,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def chat(self, request: ChatRequest | Mapping[str, Any]) -> ChatResponse:
        """Answer ``request.message`` given the prior turns in ``request.history``."""
        request = validate(ChatRequest, request)
        logger.debug("Chat turn with %d prior messages", len(request.history))
        text = await self.llm.chat(
            message=request.message,
            history=request.history,
            system=CHAT_SYSTEM_PROMPT,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return validate_reply(ChatResponse, {"response": text.strip()})
