# tests/test_work_queue.py

from __future__ import annotations

import asyncio

import pytest

from page_feeder.errors import WorkQueueClosedError
from page_feeder.queues.work_queue import WorkQueue


@pytest.mark.asyncio
async def test_idle_accounts_for_active_workers() -> None:
    release = asyncio.Event()
    started = asyncio.Event()
    seen: list[int] = []

    async def worker(item: int) -> None:
        started.set()
        await release.wait()
        seen.append(item)

    q = WorkQueue(worker, concurrency=1)
    assert q.idle() is True

    q.push([1])
    await asyncio.wait_for(started.wait(), 1.0)

    # Backlog is empty but the worker is still busy.
    assert q.size() == 0
    assert q.running() == 1
    assert q.idle() is False

    release.set()
    await asyncio.wait_for(q.join(), 1.0)
    assert q.idle() is True
    assert seen == [1]
    await q.close()


@pytest.mark.asyncio
async def test_sync_worker_and_counts() -> None:
    seen: list[int] = []

    def worker(item: int) -> None:
        if item == 3:
            raise ValueError("bad item")
        seen.append(item)

    q = WorkQueue(worker, concurrency=2)
    q.push([1, 2, 3, 4])
    await asyncio.wait_for(q.join(), 1.0)

    assert sorted(seen) == [1, 2, 4]
    assert q.processed == 3
    assert q.failed == 1
    assert q.idle() is True
    await q.close()


@pytest.mark.asyncio
async def test_push_after_close_raises() -> None:
    q = WorkQueue(lambda item: None)
    q.push([])
    await q.close()

    assert q.closed
    with pytest.raises(WorkQueueClosedError):
        q.push([1])


@pytest.mark.asyncio
async def test_len_counts_backlog_and_active() -> None:
    release = asyncio.Event()

    async def worker(_item) -> None:
        await release.wait()

    q = WorkQueue(worker, concurrency=1)
    q.push(["a", "b", "c"])
    await asyncio.sleep(0.01)

    assert q.size() == 2
    assert len(q) == 3

    release.set()
    await asyncio.wait_for(q.join(), 1.0)
    assert len(q) == 0
    await q.close()
