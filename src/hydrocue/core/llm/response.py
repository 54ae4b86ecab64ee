"""Parsing of untrusted LLM output."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class LLMResponseError(ValueError):
    """LLM output could not be used."""


def parse_json_object(content: str) -> dict[str, Any]:
    """Extract a JSON object from model output.

    Accepts a bare object, one wrapped in a Markdown code fence, or an
    object embedded in surrounding prose.
    """
    text = (content or "").strip()
    if not text:
        raise LLMResponseError("empty LLM output")
    text = _FENCE.sub("", text).strip()

    try:
        parsed: Any = json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise LLMResponseError("no JSON object in LLM output") from None
        try:
            parsed = json.loads(text[start : end + 1])
        except json.JSONDecodeError as exc:
            raise LLMResponseError(f"invalid JSON in LLM output: {exc}") from exc

    if not isinstance(parsed, dict):
        raise LLMResponseError(f"expected JSON object, got {type(parsed).__name__}")
    return parsed


def require_fields(data: dict[str, Any], fields: tuple[str, ...]) -> None:
    missing = [f for f in fields if data.get(f) is None]
    if missing:
        raise LLMResponseError(f"LLM output missing fields: {', '.join(missing)}")


def clean_message_text(content: str, max_chars: int | None = None) -> str:
    """Strip whitespace and wrapping quotes from a free-text reply."""
    text = (content or "").strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        text = text[1:-1].strip()
    if max_chars is not None:
        text = text[:max_chars]
    return text
