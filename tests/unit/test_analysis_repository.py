from unittest.mock import MagicMock, patch

import pytest
from psycopg.types.json import Jsonb

from app.database.models import AnalysisRecord
from app.database.repositories.analysis_repository import AnalysisRepository
from app.documents.exceptions import DocumentNotFoundError

DOCUMENT_ID = "550e8400-e29b-41d4-a716-446655440000"
ANALYSIS = {"summary": "s", "strengths": ["a"], "suggestion": "x", "overallScore": 80}


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestCreate:
    @patch("app.database.repositories.analysis_repository.get_connection")
    def test_returns_true_when_inserted(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = (1,)

        assert AnalysisRepository().create(DOCUMENT_ID, ANALYSIS) is True

        sql, params = mock_cursor.execute.call_args[0]
        assert "ON CONFLICT (document_id) DO NOTHING" in sql
        assert params[0] == DOCUMENT_ID
        assert isinstance(params[1], Jsonb)
        mock_conn.commit.assert_called_once()

    @patch("app.database.repositories.analysis_repository.get_connection")
    def test_returns_false_when_record_exists(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        assert AnalysisRepository().create(DOCUMENT_ID, ANALYSIS) is False

    def test_rejects_malformed_id(self) -> None:
        with pytest.raises(DocumentNotFoundError):
            AnalysisRepository().create("bad-id", ANALYSIS)


class TestFindByDocumentId:
    @patch("app.database.repositories.analysis_repository.get_connection")
    def test_returns_record(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = {
            "id": 7,
            "document_id": DOCUMENT_ID,
            "analysis_data": ANALYSIS,
            "created_at": None,
        }

        result = AnalysisRepository().find_by_document_id(DOCUMENT_ID)

        assert isinstance(result, AnalysisRecord)
        assert result.id == 7
        assert result.analysis_data == ANALYSIS

    @patch("app.database.repositories.analysis_repository.get_connection")
    def test_returns_none_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        repo = AnalysisRepository()
        assert repo.find_by_document_id(DOCUMENT_ID) is None
        assert repo.exists(DOCUMENT_ID) is False

    @patch("app.database.repositories.analysis_repository.get_connection")
    def test_malformed_id_returns_none_without_query(self, mock_get_conn: MagicMock) -> None:
        assert AnalysisRepository().find_by_document_id("bad-id") is None
        mock_get_conn.assert_not_called()
