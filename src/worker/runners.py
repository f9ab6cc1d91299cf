"""Ways of executing the heavy computation for a task.

The task registry only needs ``await runner.run(iterations) -> float``.
"""

from __future__ import annotations

import asyncio
import multiprocessing
from concurrent.futures import ProcessPoolExecutor
from typing import Callable, Protocol

from src.worker.compute import heavy_computation


Compute = Callable[[int], float]


class WorkerRunner(Protocol):
    async def run(self, iterations: int) -> float: ...


class ProcessWorkerRunner:
    """Run each computation in its own freshly started child process.

    No pooling across tasks: every call gets a dedicated single-worker
    executor that is shut down as soon as its result is in.
    """

    def __init__(self, compute: Compute = heavy_computation, *, start_method: str | None = None) -> None:
        self._compute = compute
        self._mp_context = multiprocessing.get_context(start_method) if start_method else None

    async def run(self, iterations: int) -> float:
        executor = ProcessPoolExecutor(max_workers=1, mp_context=self._mp_context)
        try:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(executor, self._compute, iterations)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)


class InlineWorkerRunner:
    """Run the computation synchronously on the event loop.

    Meant for tests and tiny workloads: it blocks the loop for the whole
    computation.
    """

    def __init__(self, compute: Compute = heavy_computation) -> None:
        self._compute = compute

    async def run(self, iterations: int) -> float:
        return self._compute(iterations)
