"""Usage logging data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class UsageLog(BaseModel):
    """Single usage log entry for one flow invocation."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    session_id: str = "anonymous"
    timestamp: datetime = Field(default_factory=datetime.now)
    mode: str  # "generate" | "regenerate" | "analyze" | "parse_file" | "chat"
    model: str | None = None
    job_title: str | None = None
    elapsed_seconds: float = 0.0
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    estimated_cost_usd: float = 0.0
    success: bool = True
    error_kind: str | None = None  # exception class name, e.g. "UpstreamError"
    error_message: str | None = None
