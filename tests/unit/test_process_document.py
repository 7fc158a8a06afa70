import json
from unittest.mock import MagicMock

from app.analysis.analyzer import Analyzer
from app.analysis.client_base import BaseAnalysisClient
from app.analysis.example_client_adapter import ExampleClientAdapter
from app.analysis.exceptions import AnalysisError, AnalysisValidationError
from app.analysis.models import AnalysisPayload
from app.database.models import DocumentRecord, DocumentStatus
from app.documents.exceptions import DocumentNotFoundError
from app.pdf.exceptions import ExtractionError
from app.tasks.exceptions import TaskInputError
from app.tasks.process_document import process_document
from app.tasks.results import Failure, Success

DOCUMENT_ID = "550e8400-e29b-41d4-a716-446655440000"
STORAGE_PATH = "uploads/resume.pdf"

PAYLOAD = AnalysisPayload(
    summary="Seasoned engineer",
    strengths=["Python", "Mentoring"],
    suggestion="Quantify impact",
    overall_score=82,
)


def _document(status: DocumentStatus = DocumentStatus.PROCESSING, error: str | None = None) -> DocumentRecord:
    return DocumentRecord(
        id=DOCUMENT_ID,
        original_name="resume.pdf",
        storage_path=STORAGE_PATH,
        owner="jane@example.com",
        status=status,
        error=error,
    )


def _make_context() -> MagicMock:
    context = MagicMock()
    context.analyses.exists.return_value = False
    context.analyses.create.return_value = True
    context.documents.find_by_id.return_value = _document()
    context.file_loader.load.return_value = b"%PDF"
    context.pdf_extractor.extract.return_value = "Jane Doe resume text"
    context.analyzer.analyze.return_value = PAYLOAD
    return context


def _run(context: MagicMock) -> Success | Failure:
    return process_document(context, {"documentId": DOCUMENT_ID, "storagePath": STORAGE_PATH})


class TestHappyPath:
    def test_persists_analysis_and_completes_document(self) -> None:
        context = _make_context()

        outcome = _run(context)

        assert isinstance(outcome, Success)
        assert outcome.output == {
            "status": "Success",
            "message": "Document processed",
            "documentId": DOCUMENT_ID,
        }
        context.file_loader.load.assert_called_once_with(STORAGE_PATH)
        context.pdf_extractor.extract.assert_called_once_with(b"%PDF")
        context.analyzer.analyze.assert_called_once_with("Jane Doe resume text")
        context.analyses.create.assert_called_once_with(DOCUMENT_ID, PAYLOAD.to_dict())
        context.documents.mark_completed.assert_called_once_with(DOCUMENT_ID)
        context.documents.mark_failed.assert_not_called()

    def test_concurrent_insert_still_succeeds(self) -> None:
        context = _make_context()
        context.analyses.create.return_value = False

        outcome = _run(context)

        assert isinstance(outcome, Success)
        context.documents.mark_completed.assert_called_once_with(DOCUMENT_ID)

    def test_long_resume_is_truncated_not_rejected(self) -> None:
        context = _make_context()
        context.pdf_extractor.extract.return_value = "a" * 15000 + "TAIL_MARKER" + "b" * 5000
        client = MagicMock(spec=BaseAnalysisClient)
        client.create_chat_completion.return_value = json.dumps(
            ExampleClientAdapter.DEFAULT_RESPONSE
        )
        context.analyzer = Analyzer(client=client, model="example")

        outcome = _run(context)

        assert isinstance(outcome, Success)
        user_prompt = client.create_chat_completion.call_args.kwargs["user_prompt"]
        assert "TAIL_MARKER" not in user_prompt
        context.analyses.create.assert_called_once_with(
            DOCUMENT_ID, ExampleClientAdapter.DEFAULT_RESPONSE
        )
        context.documents.mark_failed.assert_not_called()


class TestInvalidInput:
    def test_missing_document_id(self) -> None:
        context = _make_context()

        outcome = process_document(context, {"storagePath": STORAGE_PATH})

        assert isinstance(outcome, Failure)
        assert outcome.reason == "Invalid or missing documentId: None"
        context.documents.mark_failed.assert_not_called()
        context.file_loader.load.assert_not_called()

    def test_malformed_document_id(self) -> None:
        context = _make_context()

        outcome = process_document(context, {"documentId": "abc", "storagePath": STORAGE_PATH})

        assert isinstance(outcome, Failure)
        assert outcome.output["documentId"] == "abc"

    def test_unknown_document(self) -> None:
        context = _make_context()
        context.documents.find_by_id.side_effect = DocumentNotFoundError(
            f"Document {DOCUMENT_ID} not found"
        )

        outcome = _run(context)

        assert isinstance(outcome, Failure)
        assert "not found" in outcome.reason
        context.file_loader.load.assert_not_called()


class TestBusinessFailures:
    def test_missing_file_marks_document_failed(self) -> None:
        context = _make_context()
        context.file_loader.load.side_effect = TaskInputError(
            f"File not found at path: {STORAGE_PATH}"
        )

        outcome = _run(context)

        assert isinstance(outcome, Failure)
        assert outcome.output["message"] == f"File not found at path: {STORAGE_PATH}"
        context.documents.mark_failed.assert_called_once_with(
            DOCUMENT_ID, f"File not found at path: {STORAGE_PATH}"
        )
        context.analyses.create.assert_not_called()

    def test_empty_text_marks_document_failed(self) -> None:
        context = _make_context()
        context.pdf_extractor.extract.side_effect = ExtractionError(
            "PDF text extraction returned empty content"
        )

        outcome = _run(context)

        assert isinstance(outcome, Failure)
        context.documents.mark_failed.assert_called_once_with(
            DOCUMENT_ID, "PDF text extraction returned empty content"
        )
        context.analyzer.analyze.assert_not_called()

    def test_analysis_error_is_prefixed(self) -> None:
        context = _make_context()
        context.analyzer.analyze.side_effect = AnalysisValidationError(
            "Missing required fields: overallScore"
        )

        outcome = _run(context)

        assert isinstance(outcome, Failure)
        assert outcome.reason == "AI analysis failed: Missing required fields: overallScore"
        context.analyses.create.assert_not_called()
        context.documents.mark_completed.assert_not_called()

    def test_failure_to_mark_failed_keeps_original_reason(self) -> None:
        context = _make_context()
        context.analyzer.analyze.side_effect = AnalysisError("AI returned empty response")
        context.documents.mark_failed.side_effect = RuntimeError("db down")

        outcome = _run(context)

        assert isinstance(outcome, Failure)
        assert outcome.reason == "AI analysis failed: AI returned empty response"


class TestRedelivery:
    def test_existing_analysis_short_circuits(self) -> None:
        context = _make_context()
        context.analyses.exists.return_value = True

        outcome = _run(context)

        assert isinstance(outcome, Success)
        assert outcome.output["message"] == "Document already processed"
        context.documents.mark_completed.assert_called_once_with(DOCUMENT_ID)
        context.analyzer.analyze.assert_not_called()
        context.analyses.create.assert_not_called()

    def test_failed_document_is_not_reprocessed(self) -> None:
        context = _make_context()
        context.documents.find_by_id.return_value = _document(
            DocumentStatus.FAILED, "AI analysis failed: boom"
        )

        outcome = _run(context)

        assert isinstance(outcome, Failure)
        assert outcome.reason == "AI analysis failed: boom"
        context.file_loader.load.assert_not_called()
        context.documents.mark_failed.assert_not_called()


class TestInfrastructureErrors:
    def test_database_error_while_persisting_propagates(self) -> None:
        context = _make_context()
        context.analyses.create.side_effect = RuntimeError("connection lost")

        try:
            _run(context)
        except RuntimeError as exc:
            assert str(exc) == "connection lost"
        else:
            raise AssertionError("expected RuntimeError")
        context.documents.mark_completed.assert_not_called()
