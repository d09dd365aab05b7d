# src/page_feeder/feeder/feeder_api.py

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from ..core.idle import IdleCheck
from ..core.models import OperationKind, PageRequest
from ..core.ports import CompletionCallback, PageSource, WorkSink
from .feeder_task import FeederTask


def create_feeder(
    queue: WorkSink,
    request: PageRequest | Mapping[str, Any] | None,
    callback: CompletionCallback | None = None,
    operation_kind: OperationKind | str = OperationKind.SCAN,
    *,
    source: PageSource,
    is_idle: IdleCheck | None = None,
    token_field: str | None = None,
    loop: asyncio.AbstractEventLoop | None = None,
) -> FeederTask:
    """Build a FeederTask without starting any I/O."""
    return FeederTask(
        queue,
        request,
        callback,
        operation_kind,
        source=source,
        is_idle=is_idle,
        token_field=token_field,
        loop=loop,
    )


def scan_to_queue(
    source: PageSource,
    queue: WorkSink,
    request: PageRequest | Mapping[str, Any] | None = None,
    callback: CompletionCallback | None = None,
    **kwargs: Any,
) -> FeederTask:
    """
    Scan `source` page by page into `queue`.

    Returns the started task immediately; the first page is requested on the
    next loop tick.
    """
    return create_feeder(queue, request, callback, OperationKind.SCAN, source=source, **kwargs).start()


def query_to_queue(
    source: PageSource,
    queue: WorkSink,
    request: PageRequest | Mapping[str, Any] | None = None,
    callback: CompletionCallback | None = None,
    **kwargs: Any,
) -> FeederTask:
    """Same as scan_to_queue, but every page goes through source.query."""
    return create_feeder(queue, request, callback, OperationKind.QUERY, source=source, **kwargs).start()
