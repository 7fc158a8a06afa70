from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskStatus(str, Enum):
    """Task outcome as reported to the queue service."""

    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


@dataclass(frozen=True)
class Task:
    """A leased unit of work, surfaced by the queue service."""

    task_id: str
    task_type: str
    workflow_instance_id: str
    input_data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Task":
        return cls(
            task_id=payload["taskId"],
            task_type=payload.get("taskType") or payload.get("taskDefName", ""),
            workflow_instance_id=payload.get("workflowInstanceId", ""),
            input_data=payload.get("inputData") or {},
        )


@dataclass(frozen=True)
class TaskResult:
    """Completion report for one leased task."""

    task_id: str
    workflow_instance_id: str
    worker_id: str
    status: TaskStatus
    output_data: dict[str, Any] = field(default_factory=dict)
    reason_for_incompletion: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "taskId": self.task_id,
            "workflowInstanceId": self.workflow_instance_id,
            "workerId": self.worker_id,
            "status": self.status.value,
            "outputData": self.output_data,
        }
        if self.reason_for_incompletion is not None:
            payload["reasonForIncompletion"] = self.reason_for_incompletion
        return payload
