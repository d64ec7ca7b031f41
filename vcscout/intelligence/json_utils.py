"""Utilities for pulling a JSON object out of LLM output."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Optional

_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)


def _require_object(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected a JSON object, got {type(value).__name__}")
    return value


def parse_json_object(text: Optional[str]) -> Dict[str, Any]:
    """Parse ``text`` strictly as one JSON object."""
    if not text or not text.strip():
        raise ValueError("Empty payload")
    try:
        return _require_object(json.loads(text))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Payload is not valid JSON: {exc.msg}") from exc


def extract_json_object(text: Optional[str]) -> Dict[str, Any]:
    """
    Find and parse the first ``{...}`` block in free-form LLM output.

    Handles code fences and surrounding prose.
    """
    if not text or not text.strip():
        raise ValueError("Empty payload")

    candidate = text.strip()

    if candidate.startswith("```"):
        for part in candidate.split("```"):
            part = part.strip()
            if part.lower().startswith("json"):
                part = part[4:].strip()
            if part.startswith("{"):
                candidate = part
                break

    try:
        return _require_object(json.loads(candidate))
    except (json.JSONDecodeError, ValueError):
        pass

    match = _OBJECT_RE.search(candidate)
    if not match:
        raise ValueError("No JSON object found in payload")
    try:
        return _require_object(json.loads(match.group(0)))
    except json.JSONDecodeError as exc:
        raise ValueError("Could not extract JSON from payload") from exc
