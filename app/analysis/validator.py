"""Validates the parsed model output against the analysis payload schema."""

import math
from typing import Any

from app.analysis.exceptions import AnalysisValidationError
from app.analysis.models import REQUIRED_FIELDS, AnalysisPayload

_MIN_SCORE = 0
_MAX_SCORE = 100


def validate_and_build(data: dict[str, Any]) -> AnalysisPayload:
    """Validate raw parsed JSON and build an AnalysisPayload.

    Presence of all four keys is checked first so the error names every
    missing key at once. Values are then type and range checked but passed
    through unchanged.

    Raises:
        AnalysisValidationError: on any validation failure.
    """
    _require_fields(data)
    return AnalysisPayload(
        summary=_require_text(data["summary"], "summary"),
        strengths=_build_strengths(data["strengths"]),
        suggestion=_require_text(data["suggestion"], "suggestion"),
        overall_score=_build_score(data["overallScore"]),
    )


def _require_fields(data: dict[str, Any]) -> None:
    missing = [field for field in REQUIRED_FIELDS if field not in data]
    if missing:
        raise AnalysisValidationError(f"Missing required fields: {', '.join(missing)}")


def _require_text(raw: Any, field: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise AnalysisValidationError(f"'{field}' must be a non-empty string")
    return raw


def _build_strengths(raw: Any) -> list[str]:
    if not isinstance(raw, list) or not raw:
        raise AnalysisValidationError("'strengths' must be a non-empty list")
    for i, item in enumerate(raw):
        if not isinstance(item, str) or not item.strip():
            raise AnalysisValidationError(
                f"'strengths' item at index {i} must be a non-empty string"
            )
    return list(raw)


def _build_score(raw: Any) -> int | float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)) or math.isnan(raw):
        raise AnalysisValidationError("'overallScore' must be a number")
    if not _MIN_SCORE <= raw <= _MAX_SCORE:
        raise AnalysisValidationError(
            f"'overallScore' must be between {_MIN_SCORE} and {_MAX_SCORE}, got {raw}"
        )
    return raw
