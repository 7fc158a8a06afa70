from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class DocumentStatus(str, Enum):
    """Lifecycle of a submitted document. Transitions only move forward."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (DocumentStatus.COMPLETED, DocumentStatus.FAILED)

    def can_transition_to(self, target: "DocumentStatus") -> bool:
        if self.is_terminal:
            return False
        return _ORDER[target] > _ORDER[self]

    @classmethod
    def predecessors(cls, target: "DocumentStatus") -> list[str]:
        """Status values from which a move to `target` is allowed."""
        return [status.value for status in cls if status.can_transition_to(target)]


_ORDER = {
    DocumentStatus.PENDING: 0,
    DocumentStatus.PROCESSING: 1,
    DocumentStatus.COMPLETED: 2,
    DocumentStatus.FAILED: 2,
}


@dataclass
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    original_name: str
    storage_path: str
    owner: str
    status: DocumentStatus
    error: str | None = None
    completed_at: datetime | None = None
    failed_at: datetime | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class AnalysisRecord:
    """Represents a row from the analysis_records table."""

    id: int
    document_id: str
    analysis_data: dict[str, Any]
    created_at: datetime | None = None
