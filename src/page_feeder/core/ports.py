# src/page_feeder/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the feeder.

The feeder depends on Protocols instead of concrete implementations.
This keeps page sources and destination queues swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from .models import FeedResult, Page


class PageSource(Protocol):
    """
    Remote paginated data source.

    Both operations take the fully merged request params (continuation token
    included) and return one Page. Failures are raised, never returned.
    """

    def scan(self, params: dict[str, Any]) -> Awaitable[Page]: ...
    def query(self, params: dict[str, Any]) -> Awaitable[Page]: ...


PageOperation = Callable[[dict[str, Any]], Awaitable[Page]]


class WorkSink(Protocol):
    """Destination queue. The feeder only ever pushes."""

    def push(self, items: Sequence[Any]) -> None: ...


@runtime_checkable
class IdleQueue(Protocol):
    """Work queue that tracks active consumers as well as backlog."""

    def idle(self) -> bool: ...


@runtime_checkable
class SizedQueue(Protocol):
    """Queue that only reports its backlog."""

    def size(self) -> int: ...


class CompletionCallback(Protocol):
    """
    One-shot sink:
    - callback(error) on failure
    - callback(None, FeedResult) on success
    """

    def __call__(self, error: BaseException | None, result: FeedResult | None = None, /) -> Any: ...
