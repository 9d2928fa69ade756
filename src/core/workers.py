"""
Bounded worker pool for blocking document I/O.

Work is submitted to a fixed-size thread pool; a semaphore holds callers
back once every worker is busy, so bursts queue on the event loop
instead of piling up threads. Each submission resolves exactly once,
back on the loop that awaited it.
"""

from __future__ import annotations

import asyncio
import functools
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Optional, TypeVar

T = TypeVar("T")


class WorkerPool:
    def __init__(self, *, max_workers: int = 4) -> None:
        self._max_workers = max(1, int(max_workers))
        self._executor: Optional[ThreadPoolExecutor] = None

        # Created per event loop on first use.
        self._sem: Optional[asyncio.Semaphore] = None
        self._sem_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def max_workers(self) -> int:
        return self._max_workers

    def _semaphore(self, loop: asyncio.AbstractEventLoop) -> asyncio.Semaphore:
        if self._sem is None or self._sem_loop is not loop:
            self._sem = asyncio.Semaphore(self._max_workers)
            self._sem_loop = loop
        return self._sem

    def _pool(self) -> ThreadPoolExecutor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(
                max_workers=self._max_workers,
                thread_name_prefix="documents-worker",
            )
        return self._executor

    async def run(self, fn: Callable[..., T], *args: Any) -> T:
        loop = asyncio.get_running_loop()
        async with self._semaphore(loop):
            return await loop.run_in_executor(self._pool(), functools.partial(fn, *args))

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
