"""Exception types surfaced by the HR assistant flows."""

from __future__ import annotations


class HRAssistantError(Exception):
    """Base class for all errors raised by hr_assistant."""


class ValidationError(HRAssistantError):
    """A request or a model reply does not match its declared shape.

    Attributes:
        field: Wire name (dotted path) of the first offending field.
        constraint: One of "missing", "wrong_type", "too_short",
            "not_in_enum" or "invalid".
        source: "request" for inbound data, "reply" for LLM output.
        errors: Every violation found, as (field, constraint, message) tuples.
    """

    def __init__(
        self,
        field: str,
        constraint: str,
        message: str = "",
        *,
        source: str = "request",
        errors: list[tuple[str, str, str]] | None = None,
    ):
        self.field = field
        self.constraint = constraint
        self.source = source
        self.errors = errors or [(field, constraint, message)]
        detail = f"{source} field '{field}' failed constraint '{constraint}'"
        if message:
            detail = f"{detail}: {message}"
        super().__init__(detail)


class UpstreamError(HRAssistantError):
    """The LLM provider call failed or was unreachable."""


class TemplateError(HRAssistantError):
    """A prompt template references a field the request does not have."""
