from typing import Any

from app.database.models import DocumentRecord
from app.logging.logger import Log
from app.tasks.exceptions import TaskInputError
from app.tasks.results import Failure, Success, TaskOutcome
from app.worker.context import WorkerContext

TASK_TYPE = "fetch_file_path"


def fetch_file_path(context: WorkerContext, input_data: dict[str, Any]) -> TaskOutcome:
    """Resolve the workflow's document to its storage path.

    Looks up by `documentId` when given, otherwise takes the most recent
    document of `owner`. Never raises: on any lookup problem the output
    carries `storagePath: None` and the error, and the next task is
    expected to check for it.
    """
    document_id = input_data.get("documentId")
    owner = input_data.get("owner")

    try:
        document = _lookup(context, document_id, owner)
    except Exception as exc:
        Log.warning(f"Storage path lookup failed for document {document_id}: {exc}")
        return Failure(
            reason=str(exc),
            output={"storagePath": None, "documentId": document_id, "error": str(exc)},
        )

    Log.info(f"Resolved document {document.id} to {document.storage_path}")
    return Success(
        message="Storage path resolved",
        output={"storagePath": document.storage_path, "documentId": document.id},
    )


def _lookup(
    context: WorkerContext,
    document_id: str | None,
    owner: str | None,
) -> DocumentRecord:
    if document_id:
        document = context.documents.find_by_id(document_id)
    elif owner:
        document = context.documents.find_latest_by_owner(owner)
    else:
        raise TaskInputError("Either documentId or owner is required")

    if not document.storage_path:
        raise TaskInputError(f"Document {document.id} has no storage path")
    return document
