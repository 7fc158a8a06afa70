import uuid
from typing import Any

from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import DocumentRecord, DocumentStatus
from app.documents.exceptions import DocumentNotFoundError

_COLUMNS = """
    id, original_name, storage_path, owner, status, error,
    completed_at, failed_at, created_at
"""


def normalize_document_id(document_id: object) -> str | None:
    """Return the canonical UUID string, or None if it is not a valid id."""
    if document_id is None:
        return None
    try:
        return str(uuid.UUID(str(document_id)))
    except ValueError:
        return None


class DocumentRepository:
    """Database operations for the documents table.

    Status updates only succeed from an allowed predecessor state, so a
    document never leaves COMPLETED or FAILED. Each update touches a single
    row keyed by id; concurrent redeliveries of the same document race on
    that row alone.
    """

    def create(self, original_name: str, storage_path: str, owner: str) -> DocumentRecord:
        """Insert a new PENDING document and return it."""
        document_id = str(uuid.uuid4())
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents (id, original_name, storage_path, owner, status)
                    VALUES (%s::uuid, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        document_id,
                        original_name,
                        storage_path,
                        owner,
                        DocumentStatus.PENDING.value,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO documents returned no row")
        return self._to_record(row)

    def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if the id is malformed or no row exists.
        """
        normalized = normalize_document_id(document_id)
        if normalized is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s::uuid",
                    (normalized,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return self._to_record(row)

    def find_latest_by_owner(self, owner: str) -> DocumentRecord:
        """Find the most recently created document submitted by `owner`.

        An owner may have several documents; the newest one wins and older
        ones are silently ignored.

        Raises:
            DocumentNotFoundError: if the owner has no documents.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    WHERE owner = %s
                    ORDER BY created_at DESC
                    LIMIT 1
                    """,
                    (owner,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"No document found for owner {owner}")
        return self._to_record(row)

    def mark_processing(self, document_id: str) -> bool:
        """Move a PENDING document to PROCESSING. Returns False if not applied."""
        return self._transition(document_id, DocumentStatus.PROCESSING, "", ())

    def mark_completed(self, document_id: str) -> bool:
        """Move a document to COMPLETED and stamp completed_at."""
        return self._transition(
            document_id,
            DocumentStatus.COMPLETED,
            ", completed_at = NOW(), error = NULL",
            (),
        )

    def mark_failed(self, document_id: str, error: str) -> bool:
        """Move a document to FAILED, stamp failed_at and store the error."""
        return self._transition(
            document_id,
            DocumentStatus.FAILED,
            ", failed_at = NOW(), error = %s",
            (error,),
        )

    def _transition(
        self,
        document_id: str,
        target: DocumentStatus,
        extra_assignments: str,
        extra_params: tuple[Any, ...],
    ) -> bool:
        normalized = normalize_document_id(document_id)
        if normalized is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    UPDATE documents
                    SET status = %s{extra_assignments}
                    WHERE id = %s::uuid
                      AND status = ANY(%s)
                    """,
                    (
                        target.value,
                        *extra_params,
                        normalized,
                        DocumentStatus.predecessors(target),
                    ),
                )
                updated = cur.rowcount > 0
            conn.commit()
        return updated

    @staticmethod
    def _to_record(row: dict[str, Any]) -> DocumentRecord:
        return DocumentRecord(
            id=str(row["id"]),
            original_name=row["original_name"],
            storage_path=row["storage_path"],
            owner=row["owner"],
            status=DocumentStatus(row["status"]),
            error=row["error"],
            completed_at=row["completed_at"],
            failed_at=row["failed_at"],
            created_at=row["created_at"],
        )
