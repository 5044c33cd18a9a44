"""Request and result models for the HR assistant flows."""

from hr_assistant.models.analysis import AnalysisRequest, AnalysisResult
from hr_assistant.models.chat import ChatRequest, ChatResponse, ChatTurn
from hr_assistant.models.generation import (
    GenderPreference,
    GenerationRequest,
    GenerationResult,
    RegenerationRequest,
)
from hr_assistant.models.parsing import NOT_MENTIONED, ParseRequest, ParseResult

__all__ = [
    "NOT_MENTIONED",
    "AnalysisRequest",
    "AnalysisResult",
    "ChatRequest",
    "ChatResponse",
    "ChatTurn",
    "GenderPreference",
    "GenerationRequest",
    "GenerationResult",
    "ParseRequest",
    "ParseResult",
    "RegenerationRequest",
]
