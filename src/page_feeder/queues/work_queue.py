# src/page_feeder/queues/work_queue.py

from __future__ import annotations

"""
Work queue.

An asyncio.Queue drained by a fixed pool of worker coroutines.
Unlike a plain backlog, idle() also accounts for items a worker is still processing,
which is what the feeder's liveness predicate needs.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable, Iterable
from typing import Any

from ..errors import WorkQueueClosedError

logger = logging.getLogger(__name__)

Worker = Callable[[Any], Any]


class WorkQueue:
    def __init__(self, worker: Worker, *, concurrency: int = 4, name: str = "work") -> None:
        self.name = name
        self._worker = worker
        self._concurrency = max(1, int(concurrency))
        self._queue: asyncio.Queue[Any] = asyncio.Queue()
        self._active = 0
        self._workers: list[asyncio.Task[None]] = []
        self._closed = False

        self.processed = 0
        self.failed = 0

    @property
    def concurrency(self) -> int:
        return self._concurrency

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, items: Iterable[Any]) -> None:
        """Enqueue every item. Workers are started lazily on first push."""
        if self._closed:
            raise WorkQueueClosedError(f"queue {self.name!r} is closed")

        for item in items:
            self._queue.put_nowait(item)

        if not self._workers:
            self.start()

    def size(self) -> int:
        """Items waiting for a worker."""
        return self._queue.qsize()

    def running(self) -> int:
        """Items currently being processed."""
        return self._active

    def idle(self) -> bool:
        return self._queue.qsize() == 0 and self._active == 0

    def start(self) -> None:
        if self._workers:
            return
        loop = asyncio.get_running_loop()
        self._workers = [
            loop.create_task(self._run_worker(n), name=f"{self.name}-worker-{n}")
            for n in range(self._concurrency)
        ]
        logger.debug("queue %s: started %d workers", self.name, self._concurrency)

    async def join(self) -> None:
        """Wait until every pushed item has been processed."""
        await self._queue.join()

    async def close(self) -> None:
        """Stop the workers. Items still queued are dropped."""
        self._closed = True
        workers, self._workers = self._workers, []
        for w in workers:
            w.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        logger.debug(
            "queue %s closed (processed=%d failed=%d dropped=%d)",
            self.name,
            self.processed,
            self.failed,
            self._queue.qsize(),
        )

    async def _run_worker(self, n: int) -> None:
        while True:
            item = await self._queue.get()
            self._active += 1
            try:
                result = self._worker(item)
                if inspect.isawaitable(result):
                    await result
                self.processed += 1
            except Exception:
                self.failed += 1
                logger.exception("queue %s: worker %d failed on item", self.name, n)
            finally:
                self._active -= 1
                self._queue.task_done()

    def __len__(self) -> int:
        return self._queue.qsize() + self._active
