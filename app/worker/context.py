from dataclasses import dataclass

from app.analysis.base import BaseAnalyzer
from app.config.settings import Settings
from app.database.repositories.analysis_repository import AnalysisRepository
from app.database.repositories.document_repository import DocumentRepository
from app.pdf.base import BasePdfExtractor
from app.queue.client import QueueClient
from app.tasks.file_loader import FileLoader


@dataclass(frozen=True)
class WorkerContext:
    """Everything a task needs, built once at startup and shared read-only.

    Passed explicitly to the poll loop and to every executor call.
    """

    settings: Settings
    worker_id: str
    queue: QueueClient
    documents: DocumentRepository
    analyses: AnalysisRepository
    file_loader: FileLoader
    pdf_extractor: BasePdfExtractor
    analyzer: BaseAnalyzer
