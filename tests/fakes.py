# tests/fakes.py

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from page_feeder.core.models import FeedResult, Page


class ScriptedPageSource:
    """
    Deterministic PageSource for unit tests.

    - Replays a script of Page objects / exceptions, one per call
    - Captures (operation, params) for assertions
    - Tracks how many calls were in flight at once
    """

    def __init__(self, script: Sequence[Page | BaseException]) -> None:
        self.script = list(script)
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def scan(self, params: dict[str, Any]) -> Page:
        return await self._next("scan", params)

    async def query(self, params: dict[str, Any]) -> Page:
        return await self._next("query", params)

    async def _next(self, name: str, params: dict[str, Any]) -> Page:
        self.calls.append((name, dict(params)))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            step = self.script.pop(0)
            if isinstance(step, BaseException):
                raise step
            return step
        finally:
            self.in_flight -= 1


class BacklogQueue:
    """
    Queue that only reports its backlog via size().

    Nothing consumes it; tests call drain() to simulate consumers.
    """

    def __init__(self, backlog: Sequence[Any] = ()) -> None:
        self.backlog: list[Any] = list(backlog)
        self.pushed: list[list[Any]] = []

    def push(self, items: Sequence[Any]) -> None:
        self.pushed.append(list(items))
        self.backlog.extend(items)

    def size(self) -> int:
        return len(self.backlog)

    def drain(self) -> None:
        self.backlog.clear()


@dataclass(slots=True)
class FlagQueue:
    """Queue with an idle() flag the test flips by hand."""

    is_idle: bool = True
    pushed: list[list[Any]] = field(default_factory=list)

    def push(self, items: Sequence[Any]) -> None:
        self.pushed.append(list(items))

    def idle(self) -> bool:
        return self.is_idle


class RecordingCallback:
    """Completion callback that records every call and sets an Event on the first one."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []
        self.fired = asyncio.Event()

    def __call__(self, *args: Any) -> None:
        self.calls.append(args)
        self.fired.set()

    async def wait(self, timeout: float = 1.0) -> None:
        await asyncio.wait_for(self.fired.wait(), timeout)

    @property
    def result(self) -> FeedResult | None:
        assert len(self.calls) == 1
        return self.calls[0][1] if len(self.calls[0]) > 1 else None
