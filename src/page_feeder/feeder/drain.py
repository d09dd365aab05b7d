# src/page_feeder/feeder/drain.py

from __future__ import annotations

import asyncio
import logging

from .feeder_task import FeederTask

logger = logging.getLogger(__name__)


async def wait_until_drained(
    *tasks: FeederTask,
    poll_interval: float = 0.05,
    timeout: float | None = None,
) -> None:
    """
    Poll until no task reports is_running().

    The feeder never pushes liveness changes, so this is a plain polling loop.
    Errors are not raised here; inspect task.error afterwards.
    Raises TimeoutError if `timeout` seconds pass first.
    """
    sleep_s = max(0.001, float(poll_interval))

    async with asyncio.timeout(timeout):
        while any(t.is_running() for t in tasks):
            await asyncio.sleep(sleep_s)

    failed = [t for t in tasks if t.error is not None]
    if failed:
        logger.warning("%d of %d feeder(s) stopped on error", len(failed), len(tasks))
