import socket

from app.analysis.factory import AnalyzerFactory
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.analysis_repository import AnalysisRepository
from app.database.repositories.document_repository import DocumentRepository
from app.logging.logger import Log
from app.pdf.factory import PdfExtractorFactory
from app.queue.client import QueueClient
from app.tasks.file_loader import FileLoader
from app.tasks.registry import EXECUTORS
from app.worker.context import WorkerContext
from app.worker.task_runner import TaskRunner
from app.worker.worker import Worker


def build_context(settings: Settings, queue: QueueClient) -> WorkerContext:
    """Build the shared, read-only context handed to the loop and executors."""
    return WorkerContext(
        settings=settings,
        worker_id=settings.worker_id or socket.gethostname(),
        queue=queue,
        documents=DocumentRepository(),
        analyses=AnalysisRepository(),
        file_loader=FileLoader(settings.storage_dir),
        pdf_extractor=PdfExtractorFactory.create(settings),
        analyzer=AnalyzerFactory.create(settings),
    )


def main() -> None:
    """Entry point: initialize pool -> build context -> start worker loop."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)
    queue = QueueClient.from_settings(settings)

    try:
        context = build_context(settings, queue)
        task_runner = TaskRunner(context, EXECUTORS)
        worker = Worker(context, task_runner)
        worker.run()
    finally:
        queue.close()
        close_pool()


if __name__ == "__main__":
    main()
