"""Schema validation shared by inbound requests and LLM replies."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel

from hr_assistant.errors import ValidationError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# pydantic error type -> constraint name reported in ValidationError
_CONSTRAINTS: dict[str, str] = {
    "missing": "missing",
    "string_type": "wrong_type",
    "list_type": "wrong_type",
    "model_type": "wrong_type",
    "dict_type": "wrong_type",
    "model_attributes_type": "wrong_type",
    "string_too_short": "too_short",
    "too_short": "too_short",
    "enum": "not_in_enum",
    "literal_error": "not_in_enum",
}


def _constraint_for(error_type: str) -> str:
    return _CONSTRAINTS.get(error_type, "invalid")


def _field_path(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def validate(model: type[ModelT], data: Any, *, source: str = "request") -> ModelT:
    """Validate ``data`` against ``model`` and return the model instance.

    ``data`` may be a mapping (wire or Python field names) or an instance of
    ``model``, which is re-validated so that instances built with
    ``model_construct`` cannot bypass the constraints.
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    if not isinstance(data, Mapping):
        raise ValidationError(
            "<root>",
            "wrong_type",
            f"expected an object, got {type(data).__name__}",
            source=source,
        )
    try:
        return model.model_validate(dict(data))
    except pydantic.ValidationError as exc:
        errors = [
            (_field_path(err["loc"]), _constraint_for(err["type"]), err["msg"])
            for err in exc.errors()
        ]
        field, constraint, message = errors[0]
        raise ValidationError(
            field, constraint, message, source=source, errors=errors
        ) from exc


def validate_reply(model: type[ModelT], data: Any) -> ModelT:
    """Validate an LLM reply; failures are logged before being raised."""
    try:
        return validate(model, data, source="reply")
    except ValidationError as exc:
        logger.warning("LLM reply rejected for %s: %s", model.__name__, exc)
        raise
