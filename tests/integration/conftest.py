import os
from collections.abc import Generator
from importlib import resources
from pathlib import Path
from typing import Any

import psycopg
import pytest

from app.config.settings import Settings
from app.database.connection import build_conninfo, close_pool, get_connection, init_pool
from app.database.repositories.analysis_repository import AnalysisRepository
from app.database.repositories.document_repository import DocumentRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "resume_analysis_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    conninfo = build_conninfo(test_settings)
    try:
        with psycopg.connect(conninfo, connect_timeout=3) as conn:
            schema = resources.files("app.database").joinpath("schema.sql").read_text()
            conn.execute(schema)
    except psycopg.OperationalError as e:
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    init_pool(test_settings)
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    """Collect document ids; their rows are deleted after the test."""
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            cur.execute(
                "DELETE FROM analysis_records WHERE document_id = ANY(%s::uuid[])",
                (cleanup,),
            )
            cur.execute("DELETE FROM documents WHERE id = ANY(%s::uuid[])", (cleanup,))
        conn.commit()


@pytest.fixture
def document_repo(integration_pool: None) -> DocumentRepository:
    return DocumentRepository()


@pytest.fixture
def analysis_repo(integration_pool: None) -> AnalysisRepository:
    return AnalysisRepository()


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def seed_document(
    document_repo: DocumentRepository,
    integration_cleanup: list[str],
    storage_dir: Path,
    sample_pdf_bytes: bytes,
) -> Any:
    """A PENDING document whose file exists under storage_dir."""
    (storage_dir / "resume.pdf").write_bytes(sample_pdf_bytes)
    document = document_repo.create("resume.pdf", "resume.pdf", "jane@example.com")
    integration_cleanup.append(document.id)
    return document
