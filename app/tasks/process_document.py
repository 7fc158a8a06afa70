from typing import Any

from app.analysis.exceptions import AnalysisError
from app.analysis.models import AnalysisPayload
from app.database.models import DocumentStatus
from app.database.repositories.document_repository import normalize_document_id
from app.documents.exceptions import DocumentNotFoundError
from app.logging.logger import Log
from app.pdf.exceptions import ExtractionError
from app.tasks.exceptions import TaskInputError
from app.tasks.results import Failure, Success, TaskOutcome
from app.worker.context import WorkerContext

TASK_TYPE = "process_document"


def process_document(context: WorkerContext, input_data: dict[str, Any]) -> TaskOutcome:
    """Extract, analyze and persist one document, then settle its status.

    Business failures (missing file, empty text, unusable model answer) mark
    the document FAILED and come back as `Failure`. Database errors on the
    way are not caught here; the runner reports them to the queue, which may
    redeliver the task. Redelivery is safe: an existing analysis short-circuits
    to success and a FAILED document is not reprocessed.
    """
    raw_document_id = input_data.get("documentId")
    storage_path = input_data.get("storagePath")

    document_id = normalize_document_id(raw_document_id)
    if document_id is None:
        message = f"Invalid or missing documentId: {raw_document_id}"
        Log.error(f"Document processing failed: {message}")
        return _failure(raw_document_id, message)

    previous = _previous_outcome(context, document_id)
    if previous is not None:
        return previous

    Log.info(f"Processing document {document_id}")
    try:
        payload = _analyze_file(context, storage_path)
    except (TaskInputError, ExtractionError) as exc:
        return _fail_document(context, document_id, str(exc))
    except AnalysisError as exc:
        return _fail_document(context, document_id, f"AI analysis failed: {exc}")

    if not context.analyses.create(document_id, payload.to_dict()):
        Log.info(f"Document {document_id} already had an analysis, keeping it")
    context.documents.mark_completed(document_id)
    Log.info(f"Document {document_id} processed")
    return _success(document_id, "Document processed")


def _previous_outcome(context: WorkerContext, document_id: str) -> TaskOutcome | None:
    if context.analyses.exists(document_id):
        context.documents.mark_completed(document_id)
        Log.info(f"Document {document_id} already analyzed, skipping")
        return _success(document_id, "Document already processed")

    try:
        document = context.documents.find_by_id(document_id)
    except DocumentNotFoundError as exc:
        Log.error(f"Document processing failed: {exc}")
        return _failure(document_id, str(exc))

    if document.status is DocumentStatus.FAILED:
        message = document.error or "Document previously failed"
        Log.info(f"Document {document_id} already FAILED, skipping")
        return _failure(document_id, message)
    return None


def _analyze_file(context: WorkerContext, storage_path: str | None) -> AnalysisPayload:
    raw_bytes = context.file_loader.load(storage_path)
    Log.info(f"Loaded {len(raw_bytes)} bytes from {storage_path}")

    text = context.pdf_extractor.extract(raw_bytes)
    Log.info(f"Text extraction successful: {len(text)} chars")

    payload = context.analyzer.analyze(text)
    Log.info("AI analysis successful")
    return payload


def _fail_document(context: WorkerContext, document_id: str, message: str) -> Failure:
    Log.error(f"Document {document_id} processing failed: {message}")
    try:
        context.documents.mark_failed(document_id, message)
    except Exception as exc:
        Log.warning(f"Could not mark document {document_id} as FAILED: {exc}")
    return _failure(document_id, message)


def _success(document_id: str, message: str) -> Success:
    return Success(
        message=message,
        output={"status": "Success", "message": message, "documentId": document_id},
    )


def _failure(document_id: object, message: str) -> Failure:
    return Failure(
        reason=message,
        output={"status": "Failure", "message": message, "documentId": document_id},
    )
