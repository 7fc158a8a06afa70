from collections.abc import Mapping

from app.logging.logger import Log
from app.queue.exceptions import QueueError
from app.queue.models import Task, TaskResult
from app.tasks.registry import TaskExecutor
from app.tasks.results import Failure, to_failed_task_result, to_task_result
from app.worker.context import WorkerContext


class TaskRunner:
    """Run one leased task, catch exceptions, and report the result."""

    def __init__(
        self,
        context: WorkerContext,
        executors: Mapping[str, TaskExecutor],
    ) -> None:
        self._context = context
        self._executors = dict(executors)

    @property
    def task_types(self) -> list[str]:
        return list(self._executors)

    def run(self, task: Task) -> None:
        """Execute a single task and report its outcome to the queue."""
        Log.info(f"Running task {task.task_id} ({task.task_type})")
        self._report(self._execute(task))

    def _execute(self, task: Task) -> TaskResult:
        worker_id = self._context.worker_id
        executor = self._executors.get(task.task_type)
        if executor is None:
            Log.error(f"Task {task.task_id} has unknown type {task.task_type}")
            return to_failed_task_result(
                task, f"No executor registered for task type {task.task_type}", worker_id
            )

        try:
            outcome = executor(self._context, task.input_data)
        except Exception as exc:
            Log.exception(f"Task {task.task_id} failed: {exc}")
            return to_failed_task_result(task, str(exc), worker_id)

        if isinstance(outcome, Failure):
            Log.warning(f"Task {task.task_id} completed with failure: {outcome.reason}")
        else:
            Log.info(f"Task {task.task_id} completed: {outcome.message}")
        return to_task_result(task, outcome, worker_id)

    def _report(self, result: TaskResult) -> None:
        """Send the result; if that fails the lease expires and the task is redelivered."""
        try:
            self._context.queue.update_task(result)
        except QueueError as exc:
            Log.error(f"Could not report task {result.task_id}: {exc}")
        except Exception as exc:
            Log.exception(f"Unexpected error reporting task {result.task_id}: {exc}")
