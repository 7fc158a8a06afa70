"""Tagged outcomes returned by task executors.

Executors never signal business failures by raising. They return
`Success` or `Failure`, and `to_task_result` reports both as COMPLETED to
the queue so the workflow reaches a terminal state instead of being
retried. The real outcome travels in the task's output data.
"""

from dataclasses import dataclass, field
from typing import Any

from app.queue.models import Task, TaskResult, TaskStatus


@dataclass(frozen=True)
class Success:
    message: str
    output: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Failure:
    reason: str
    output: dict[str, Any] = field(default_factory=dict)


TaskOutcome = Success | Failure


def to_task_result(task: Task, outcome: TaskOutcome, worker_id: str) -> TaskResult:
    return TaskResult(
        task_id=task.task_id,
        workflow_instance_id=task.workflow_instance_id,
        worker_id=worker_id,
        status=TaskStatus.COMPLETED,
        output_data=dict(outcome.output),
    )


def to_failed_task_result(task: Task, reason: str, worker_id: str) -> TaskResult:
    """Report an infrastructure error so the queue's retry policy applies."""
    return TaskResult(
        task_id=task.task_id,
        workflow_instance_id=task.workflow_instance_id,
        worker_id=worker_id,
        status=TaskStatus.FAILED,
        reason_for_incompletion=reason,
    )
