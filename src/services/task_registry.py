from __future__ import annotations

import asyncio
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any

from src.crud.users import is_canonical_uuid
from src.exceptions import NotFoundError, ValidationError
from src.schemas.task import TaskRecord, TaskStatus
from src.worker.runners import WorkerRunner

logger = logging.getLogger("users_api.tasks")


@dataclass(frozen=True)
class TaskHandle:
    """What ``submit`` hands back: the new id, its initial snapshot and the completion step."""

    task_id: str
    snapshot: TaskRecord
    completion: asyncio.Task

    async def wait(self) -> TaskRecord | None:
        """Wait for the completion step and return the final record."""

        return await self.completion


class TaskRegistry:
    """In-memory registry of heavy-computation tasks.

    Each submitted task gets a completion step (an asyncio task) that awaits
    the worker and applies exactly one terminal transition to the record.
    All mutation happens on the event loop; records are replaced wholesale,
    never edited in place.
    """

    def __init__(self, runner: WorkerRunner, *, max_iterations: int) -> None:
        self._runner = runner
        self._max_iterations = max_iterations
        self._tasks: dict[str, TaskRecord] = {}
        self._pending: dict[str, asyncio.Task] = {}

    def validate_iterations(self, iterations: Any) -> int:
        # bool is an int subclass; JSON true/false is not an iteration count.
        if isinstance(iterations, bool) or not isinstance(iterations, int):
            raise ValidationError.single("iterations", "iterations must be an integer")
        if iterations <= 0:
            raise ValidationError.single("iterations", "iterations must be a positive integer")
        if iterations > self._max_iterations:
            raise ValidationError.single(
                "iterations",
                f"iterations must not exceed {self._max_iterations}",
            )
        return iterations

    async def submit(self, iterations: Any) -> TaskHandle:
        iterations = self.validate_iterations(iterations)

        task_id = str(uuid.uuid4())
        record = TaskRecord(task_id=task_id, iterations=iterations)
        self._tasks[task_id] = record

        started = time.perf_counter()
        completion = asyncio.create_task(self._run(task_id, iterations, started), name=f"task-{task_id}")
        self._pending[task_id] = completion
        completion.add_done_callback(lambda _: self._pending.pop(task_id, None))

        logger.info("task_submitted task_id=%s iterations=%s", task_id, iterations)
        return TaskHandle(task_id=task_id, snapshot=record.model_copy(), completion=completion)

    async def get_status(self, task_id: str) -> TaskRecord:
        record = self._tasks.get(task_id) if is_canonical_uuid(task_id) else None
        if record is None:
            raise NotFoundError("Task not found")
        return record.model_copy()

    async def _run(self, task_id: str, iterations: int, started: float) -> TaskRecord | None:
        try:
            result = await self._runner.run(iterations)
        except Exception as exc:
            logger.warning("task_failed task_id=%s error=%r", task_id, exc)
            return self._finish(task_id, status=TaskStatus.ERROR, error=f"{type(exc).__name__}: {exc}")

        duration_ms = (time.perf_counter() - started) * 1000
        return self._finish(
            task_id,
            status=TaskStatus.COMPLETED,
            result=float(result),
            duration=duration_ms,
        )

    def _finish(self, task_id: str, **changes: Any) -> TaskRecord | None:
        current = self._tasks.get(task_id)
        if current is None:
            logger.debug("task_completion_dropped task_id=%s (registry closed)", task_id)
            return None

        if current.is_finished:
            logger.warning("task_completion_ignored task_id=%s status=%s", task_id, current.status.value)
            return current

        updated = current.model_copy(update=changes)
        self._tasks[task_id] = updated
        logger.info(
            "task_finished task_id=%s status=%s duration_ms=%s",
            task_id,
            updated.status.value,
            updated.duration,
        )
        return updated

    async def close(self) -> None:
        """Drop in-flight completion steps and all records."""

        pending = list(self._pending.values())
        for completion in pending:
            completion.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        self._pending.clear()
        self._tasks.clear()
