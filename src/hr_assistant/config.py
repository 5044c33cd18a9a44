"""Application configuration loaded from config.yaml."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    max_retries: int = 3
    timeout: int = 60
    max_tokens: int = 4096

    def __post_init__(self) -> None:
        if not 1 <= self.max_retries <= 10:
            raise ValueError(f"llm.max_retries must be between 1 and 10, got {self.max_retries}")
        if self.timeout < 1:
            raise ValueError(f"llm.timeout must be at least 1 second, got {self.timeout}")
        if self.max_tokens < 1:
            raise ValueError(f"llm.max_tokens must be positive, got {self.max_tokens}")


@dataclass(frozen=True)
class PipelineConfig:
    generation_temperature: float = 0.7
    regeneration_temperature: float = 0.9
    analysis_temperature: float = 0.3
    parse_temperature: float = 0.0
    chat_temperature: float = 0.5

    def __post_init__(self) -> None:
        for name in (
            "generation_temperature",
            "regeneration_temperature",
            "analysis_temperature",
            "parse_temperature",
            "chat_temperature",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"pipeline.{name} must be between 0 and 1, got {value}")


@dataclass(frozen=True)
class StorageConfig:
    history_db_path: str = "~/.hr-assistant/history.db"
    usage_db_path: str = "~/.hr-assistant/usage.db"

    @property
    def resolved_history_db_path(self) -> Path:
        return Path(self.history_db_path).expanduser()

    @property
    def resolved_usage_db_path(self) -> Path:
        return Path(self.usage_db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    Raises:
        ValueError: a configured value is out of range.
    """
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        pipeline=PipelineConfig(**raw.get("pipeline", {})),
        storage=StorageConfig(**raw.get("storage", {})),
    )
