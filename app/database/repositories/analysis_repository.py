from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.database.models import AnalysisRecord
from app.database.repositories.document_repository import normalize_document_id
from app.documents.exceptions import DocumentNotFoundError


class AnalysisRepository:
    """Append-only store for analysis_records. One row per document at most."""

    def create(self, document_id: str, analysis_data: dict[str, Any]) -> bool:
        """Insert the analysis for a document.

        Returns:
            True if a row was inserted, False if the document already had one.
        """
        normalized = normalize_document_id(document_id)
        if normalized is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO analysis_records (document_id, analysis_data)
                    VALUES (%s::uuid, %s)
                    ON CONFLICT (document_id) DO NOTHING
                    RETURNING id
                    """,
                    (normalized, Jsonb(analysis_data)),
                )
                inserted = cur.fetchone() is not None
            conn.commit()
        return inserted

    def find_by_document_id(self, document_id: str) -> AnalysisRecord | None:
        """Return the analysis for a document, or None if there is none yet."""
        normalized = normalize_document_id(document_id)
        if normalized is None:
            return None

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, document_id, analysis_data, created_at
                    FROM analysis_records
                    WHERE document_id = %s::uuid
                    """,
                    (normalized,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return AnalysisRecord(
            id=row["id"],
            document_id=str(row["document_id"]),
            analysis_data=row["analysis_data"],
            created_at=row["created_at"],
        )

    def exists(self, document_id: str) -> bool:
        return self.find_by_document_id(document_id) is not None
