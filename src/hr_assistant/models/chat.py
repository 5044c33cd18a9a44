"""Pydantic models for the support chatbot."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from hr_assistant.models.generation import WIRE_CONFIG


class ChatTurn(BaseModel):
    role: Literal["user", "model"]
    content: str

    model_config = WIRE_CONFIG


class ChatRequest(BaseModel):
    history: list[ChatTurn] = Field(default_factory=list)
    message: str = Field(min_length=1)

    model_config = WIRE_CONFIG


class ChatResponse(BaseModel):
    response: str = Field(min_length=1)

    model_config = WIRE_CONFIG
