from __future__ import annotations

from dataclasses import dataclass

from fastapi import Request

from src.config import Settings
from src.crud.users import UserStore
from src.services.task_registry import TaskRegistry
from src.worker.runners import ProcessWorkerRunner, WorkerRunner


@dataclass
class AppContext:
    """Process-wide state, built at startup and torn down at shutdown."""

    settings: Settings
    users: UserStore
    tasks: TaskRegistry

    @classmethod
    def build(cls, settings: Settings, *, runner: WorkerRunner | None = None) -> "AppContext":
        if runner is None:
            runner = ProcessWorkerRunner(start_method=settings.worker_start_method)

        return cls(
            settings=settings,
            users=UserStore(settings.users_path),
            tasks=TaskRegistry(runner, max_iterations=settings.max_iterations),
        )

    async def aclose(self) -> None:
        await self.tasks.close()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_user_store(request: Request) -> UserStore:
    return get_context(request).users


def get_task_registry(request: Request) -> TaskRegistry:
    return get_context(request).tasks
