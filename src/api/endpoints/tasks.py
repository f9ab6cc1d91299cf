from __future__ import annotations

from fastapi import APIRouter, Depends, status

from src.context import get_task_registry
from src.schemas.task import TaskAccepted, TaskCreate, TaskRecord
from src.services.task_registry import TaskRegistry


router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.post("/heavy", response_model=TaskAccepted, status_code=status.HTTP_202_ACCEPTED)
async def submit_heavy_task_endpoint(
    payload: TaskCreate,
    registry: TaskRegistry = Depends(get_task_registry),
) -> TaskAccepted:
    """Start a heavy computation and return immediately; poll GET /tasks/{task_id} for the outcome."""

    handle = await registry.submit(payload.iterations)
    return TaskAccepted(
        task_id=handle.task_id,
        status=handle.snapshot.status,
        iterations=handle.snapshot.iterations,
    )


@router.get("/{task_id}", response_model=TaskRecord, response_model_exclude_none=True)
async def get_task_status_endpoint(
    task_id: str,
    registry: TaskRegistry = Depends(get_task_registry),
) -> TaskRecord:
    return await registry.get_status(task_id)
