from collections.abc import Callable
from typing import Any

from app.tasks import fetch_file_path, process_document
from app.tasks.results import TaskOutcome
from app.worker.context import WorkerContext

TaskExecutor = Callable[[WorkerContext, dict[str, Any]], TaskOutcome]

EXECUTORS: dict[str, TaskExecutor] = {
    fetch_file_path.TASK_TYPE: fetch_file_path.fetch_file_path,
    process_document.TASK_TYPE: process_document.process_document,
}
