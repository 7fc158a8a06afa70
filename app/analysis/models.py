from dataclasses import dataclass
from typing import Any

REQUIRED_FIELDS = ("summary", "strengths", "suggestion", "overallScore")


@dataclass(frozen=True)
class AnalysisPayload:
    """Validated resume analysis, values exactly as the model returned them."""

    summary: str
    strengths: list[str]
    suggestion: str
    overall_score: int | float

    def to_dict(self) -> dict[str, Any]:
        """Wire form with the model's camelCase keys."""
        return {
            "summary": self.summary,
            "strengths": list(self.strengths),
            "suggestion": self.suggestion,
            "overallScore": self.overall_score,
        }
