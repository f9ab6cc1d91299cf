from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictInt


class TaskStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class TaskCreate(BaseModel):
    # Positivity and the upper bound are enforced by the registry, which owns the configured cap.
    iterations: StrictInt


class TaskAccepted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(alias="taskId")
    status: TaskStatus
    iterations: int


class TaskRecord(BaseModel):
    """Lifecycle record of one heavy-computation task.

    ``duration`` is the wall-clock time in milliseconds between submission and
    completion. ``result`` and ``duration`` are only set once the task is
    ``completed``; ``error`` only once it is ``error``.
    """

    model_config = ConfigDict(populate_by_name=True)

    task_id: str = Field(alias="taskId")
    status: TaskStatus = TaskStatus.PROCESSING
    iterations: int
    result: float | None = None
    duration: float | None = None
    error: str | None = None

    @property
    def is_finished(self) -> bool:
        return self.status != TaskStatus.PROCESSING
