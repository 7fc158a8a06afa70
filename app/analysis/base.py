from abc import ABC, abstractmethod

from app.analysis.models import AnalysisPayload


class BaseAnalyzer(ABC):
    """Contract for all resume analyzers."""

    @abstractmethod
    def analyze(self, text: str) -> AnalysisPayload:
        """Turn extracted resume text into a structured analysis.

        Args:
            text: Plain text from the extraction step. Over-long input is
                  truncated, never rejected.

        Returns:
            AnalysisPayload with summary, strengths, suggestion and score.

        Raises:
            AnalysisError: on any failure.
        """
