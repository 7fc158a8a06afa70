import time
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial

from app.logging.logger import Log
from app.queue.models import Task
from app.worker.context import WorkerContext
from app.worker.task_runner import TaskRunner


class Worker:
    """Poll loop: reap -> poll for free slots -> dispatch -> sleep.

    Leased tasks run on a fixed-size thread pool, so a slow task only ever
    occupies its own slot and the loop keeps polling for the others.
    """

    def __init__(self, context: WorkerContext, task_runner: TaskRunner) -> None:
        self._context = context
        self._task_runner = task_runner
        self._concurrency = max(1, context.settings.worker_concurrency)
        self._in_flight: set[Future[None]] = set()

    def run(self, max_cycles: int | None = None) -> None:
        """Main poll loop. Runs forever until interrupted.

        If max_cycles is set, stop after that many lease-check cycles (for
        testing). In-flight tasks are always allowed to finish.
        """
        settings = self._context.settings
        Log.info(
            f"Worker {self._context.worker_id} started, polling "
            f"{self._task_runner.task_types} with concurrency {self._concurrency}"
        )
        cycles = 0
        with ThreadPoolExecutor(
            max_workers=self._concurrency, thread_name_prefix="task"
        ) as executor:
            try:
                while max_cycles is None or cycles < max_cycles:
                    self._dispatch_cycle(executor)
                    cycles += 1
                    time.sleep(settings.worker_poll_interval_ms / 1000)
            except KeyboardInterrupt:
                Log.info("Worker shutting down gracefully")
            Log.info(f"Waiting for {len(self._in_flight)} in-flight tasks")
        self._in_flight.clear()

    def _dispatch_cycle(self, executor: ThreadPoolExecutor) -> None:
        self._in_flight = {f for f in self._in_flight if not f.done()}
        for task_type in self._task_runner.task_types:
            free_slots = self._concurrency - len(self._in_flight)
            if free_slots <= 0:
                Log.debug("All worker slots busy")
                return
            for task in self._try_poll(task_type, free_slots):
                future = executor.submit(self._task_runner.run, task)
                future.add_done_callback(partial(self._log_crash, task))
                self._in_flight.add(future)

    @staticmethod
    def _log_crash(task: Task, future: Future[None]) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            Log.error(f"Task {task.task_id} crashed outside its runner: {exc!r}")

    def _try_poll(self, task_type: str, count: int) -> list[Task]:
        """Attempt to lease tasks. Gracefully handle queue errors."""
        settings = self._context.settings
        try:
            return self._context.queue.poll(
                task_type,
                self._context.worker_id,
                count,
                settings.worker_poll_timeout_ms,
            )
        except Exception as exc:
            Log.warning(f"Queue poll for {task_type} failed, will retry: {exc}")
            return []
