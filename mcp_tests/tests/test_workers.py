import asyncio
import threading
import time

import pytest

from core.workers import WorkerPool


@pytest.mark.asyncio
async def test_worker_pool_returns_result_and_propagates_errors():
    pool = WorkerPool(max_workers=2)

    assert await pool.run(lambda a, b: a + b, 2, 3) == 5

    def boom():
        raise OSError("disk gone")

    with pytest.raises(OSError, match="disk gone"):
        await pool.run(boom)

    pool.shutdown()


@pytest.mark.asyncio
async def test_worker_pool_bounds_concurrency():
    pool = WorkerPool(max_workers=2)
    lock = threading.Lock()
    state = {"running": 0, "peak": 0}

    def work():
        with lock:
            state["running"] += 1
            state["peak"] = max(state["peak"], state["running"])
        time.sleep(0.02)
        with lock:
            state["running"] -= 1
        return True

    results = await asyncio.gather(*(pool.run(work) for _ in range(6)))

    assert results == [True] * 6
    assert state["peak"] <= 2
    pool.shutdown()


def test_worker_pool_minimum_one_worker():
    assert WorkerPool(max_workers=0).max_workers == 1
