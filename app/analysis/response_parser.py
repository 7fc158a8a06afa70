"""Isolate the JSON object inside a free-form model response.

Models are asked for bare JSON but regularly wrap it in markdown fences or
add a sentence before or after it. The cleanup runs as a short chain:

    strip fences -> trim prose -> isolate braces -> parse

Each step only narrows the text, so already-clean input passes through
unchanged.
"""

import json
import re
from typing import Any

from app.analysis.exceptions import AnalysisError

_LEADING_FENCE = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\s*```$")
_GREEDY_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a leading ``` / ```json marker and a trailing ``` marker."""
    stripped = _LEADING_FENCE.sub("", text.strip(), count=1)
    return _TRAILING_FENCE.sub("", stripped, count=1)


def trim_surrounding_prose(text: str) -> str:
    """Drop everything before the first '{' and after the last '}'."""
    start = text.find("{")
    if start != -1:
        text = text[start:]
    end = text.rfind("}")
    if end != -1:
        text = text[: end + 1]
    return text.strip()


def isolate_object(cleaned: str, raw: str) -> str | None:
    """Return the brace-delimited candidate, falling back to a scan of `raw`."""
    if cleaned.startswith("{") and cleaned.endswith("}"):
        return cleaned
    match = _GREEDY_OBJECT.search(raw)
    if match is None:
        return None
    return match.group(0)


def parse_object(candidate: str) -> dict[str, Any]:
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise AnalysisError(f"Invalid JSON in model response: {exc}") from exc
    if not isinstance(parsed, dict):
        raise AnalysisError("JSON response must be an object")
    return parsed


def extract_json_object(raw: str) -> dict[str, Any]:
    """Return the single JSON object contained in a model response.

    Raises:
        AnalysisError: if no object can be isolated or it does not parse.
    """
    cleaned = trim_surrounding_prose(strip_code_fences(raw))
    candidate = isolate_object(cleaned, raw)
    if candidate is None:
        raise AnalysisError("No JSON object found in model response")
    return parse_object(candidate)
