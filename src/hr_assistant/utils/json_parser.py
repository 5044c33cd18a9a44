"""Pull a JSON value out of free-form LLM output."""

from __future__ import annotations

import json
import re

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*\n?(.*?)\n?```", re.DOTALL)


def extract_json(text: str) -> dict | list:
    """Extract the JSON payload from an LLM reply.

    Tried in order: the whole text, the body of the first fenced code block,
    the span from the first '{' to the last '}', and the span from the first
    '[' to the last ']'.

    Raises:
        ValueError: nothing in ``text`` parses as JSON.
    """
    text = (text or "").strip()
    candidates = [text]

    fenced = _FENCE_RE.search(text)
    if fenced:
        candidates.append(fenced.group(1).strip())

    for source in list(candidates):
        for opener, closer in (("{", "}"), ("[", "]")):
            span = _span(source, opener, closer)
            if span is not None:
                candidates.append(span)

    for candidate in candidates:
        try:
            value = json.loads(candidate)
        except (json.JSONDecodeError, TypeError):
            continue
        if isinstance(value, (dict, list)):
            return value

    raise ValueError(f"Could not extract JSON from text: {text[:200]}...")


def _span(text: str, opener: str, closer: str) -> str | None:
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        return None
    return text[start : end + 1]
