"""Saved job description model."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class HistoryItem(BaseModel):
    """A generated (or regenerated) job description kept for later viewing."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    title: str  # role title from the generation form
    description: str
    company_name: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)
