from typing import Any

from app.config.settings import Settings
from app.database.models import DocumentStatus
from app.database.repositories.analysis_repository import AnalysisRepository
from app.database.repositories.document_repository import DocumentRepository
from app.documents.exceptions import DocumentNotFoundError
from app.logging.logger import Log
from app.queue.client import QueueClient


class DocumentService:
    """Submission, trigger and status operations called by the HTTP layer.

    Infrastructure failures (database, queue) propagate unchanged; the
    caller maps them to a generic error response.
    """

    def __init__(
        self,
        documents: DocumentRepository,
        analyses: AnalysisRepository,
        queue: QueueClient,
        settings: Settings,
    ) -> None:
        self._documents = documents
        self._analyses = analyses
        self._queue = queue
        self._settings = settings

    def submit(
        self,
        storage_path: str,
        original_name: str,
        owner: str | None = None,
    ) -> dict[str, str]:
        """Register an uploaded file as a PENDING document."""
        document = self._documents.create(
            original_name=original_name,
            storage_path=storage_path,
            owner=owner or self._settings.default_owner,
        )
        Log.info(f"Document {document.id} submitted ({original_name})")
        return {"documentId": document.id}

    def trigger_analysis(self, document_id: str) -> dict[str, str]:
        """Start the analysis workflow for a document and mark it PROCESSING.

        Raises:
            DocumentNotFoundError: if the document does not exist.
        """
        document = self._documents.find_by_id(document_id)
        workflow_id = self._queue.start_workflow(
            self._settings.conductor_workflow_name,
            self._settings.conductor_workflow_version,
            {"documentId": document.id, "owner": document.owner},
        )
        if not self._documents.mark_processing(document.id):
            Log.warning(
                f"Document {document.id} not moved to PROCESSING "
                f"(current status {document.status.value})"
            )
        Log.info(f"Workflow {workflow_id} started for document {document.id}")
        return {"workflowId": workflow_id}

    def get_status(self, document_id: str) -> dict[str, Any]:
        """Polling view of a document.

        An existing analysis wins over the document's status column.
        """
        record = self._analyses.find_by_document_id(document_id)
        if record is not None:
            return {"status": DocumentStatus.COMPLETED.value, "data": record.analysis_data}

        try:
            document = self._documents.find_by_id(document_id)
        except DocumentNotFoundError:
            return {"status": DocumentStatus.PENDING.value}

        if document.status is DocumentStatus.FAILED:
            return {
                "status": DocumentStatus.FAILED.value,
                "message": document.error or "Analysis failed during processing.",
            }
        return {"status": DocumentStatus.PENDING.value}
