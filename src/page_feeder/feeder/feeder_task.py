# src/page_feeder/feeder/feeder_task.py

from __future__ import annotations

"""
Feeder task.

One FeederTask drives one pagination run:
- issues a page request through the bound operation (scan or query),
- pushes each page's items onto the destination queue,
- threads the continuation token into the next request,
- fires the completion callback exactly once (error or FeedResult).

Every next page is scheduled on a later loop tick (loop.call_soon), never awaited
inline, so queue consumers run between pages and the stack depth stays flat.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from typing import Any

from ..core.idle import IdleCheck, resolve_idle_check
from ..core.models import FeedResult, OperationKind, Page, PageRequest
from ..core.ports import CompletionCallback, PageOperation, PageSource, WorkSink

logger = logging.getLogger(__name__)


_OPERATIONS: dict[OperationKind, Callable[[PageSource], PageOperation]] = {
    OperationKind.SCAN: lambda source: source.scan,
    OperationKind.QUERY: lambda source: source.query,
}


def _noop(*_args: Any, **_kwargs: Any) -> None:
    return None


class FeederTask:
    """
    State + transition logic for one pagination run.

    Only on_page_result() mutates state. Callers should treat everything except
    is_running() and the read-only properties as internal.
    """

    def __init__(
        self,
        queue: WorkSink,
        request: PageRequest | Mapping[str, Any] | None,
        callback: CompletionCallback | None = None,
        operation_kind: OperationKind | str = OperationKind.SCAN,
        *,
        source: PageSource,
        is_idle: IdleCheck | None = None,
        token_field: str | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        kind = OperationKind(operation_kind)

        self.queue = queue
        self.operation_kind = kind
        self._request = PageRequest.coerce(request, token_field=token_field)
        self._operation = _OPERATIONS[kind](source)
        self._callback: Callable[..., Any] = callback if callable(callback) else _noop
        self._is_idle = resolve_idle_check(queue, is_idle)
        self._loop = loop

        self._has_more_items = True
        self._error: BaseException | None = None
        self._item_count = 0
        self._page_count = 0

        self._started = False
        self._completed = False
        self._inflight: asyncio.Task[None] | None = None

    # ---- read-only view ----

    @property
    def request(self) -> PageRequest:
        return self._request

    @property
    def has_more_items(self) -> bool:
        return self._has_more_items

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def item_count(self) -> int:
        return self._item_count

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def done(self) -> bool:
        """True once the completion callback has fired."""
        return self._completed

    def is_running(self) -> bool:
        """
        Liveness predicate.

        False as soon as an error occurred. Otherwise true while more pages remain
        or the destination queue is not idle yet.
        """
        return self._error is None and (not self._is_idle() or self._has_more_items)

    # ---- lifecycle ----

    def start(self) -> FeederTask:
        """Schedule the first page on the next loop tick and return immediately."""
        if self._started:
            raise RuntimeError("FeederTask already started")
        self._started = True

        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._loop.call_soon(self._execute_page)
        logger.debug("%s feeder started", self.operation_kind.value)
        return self

    def _execute_page(self) -> None:
        if self._completed:
            return
        params = self._request.to_params()
        self._inflight = self._get_loop().create_task(self._fetch(params))

    async def _fetch(self, params: dict[str, Any]) -> None:
        try:
            page = await self._operation(params)
        except Exception as exc:
            self.on_page_result(exc, None)
            return

        if not isinstance(page, Page):
            self.on_page_result(
                TypeError(f"{self.operation_kind.value} returned {type(page).__name__}, expected Page"),
                None,
            )
            return

        try:
            self.on_page_result(None, page)
        except Exception as exc:
            # Nothing awaits _inflight, so an escaping exception would leave is_running() true forever.
            logger.exception("%s page %d could not be handled", self.operation_kind.value, self._page_count + 1)
            if not self._completed:
                self._fail(exc)

    def on_page_result(self, error: BaseException | None, page: Page | None) -> None:
        """
        Transition function, evaluated in order:
        1. error        -> record it, callback(error), stop
        2. progress     -> push items, update counters
        3. no token     -> has_more_items=False, callback(None, FeedResult), stop
        4. token        -> thread token into the request, schedule the next page
        """
        if self._completed:
            logger.warning("Ignoring page result for finished %s feeder", self.operation_kind.value)
            return

        kind = self.operation_kind.value

        if error is not None:
            logger.warning("%s page %d failed: %r", kind, self._page_count + 1, error)
            self._fail(error)
            return

        if page is None:
            raise TypeError("on_page_result needs a page when error is None")

        try:
            items = list(page.items)
            self.queue.push(items)
        except Exception as exc:
            logger.exception("push to destination queue failed (%s page %d)", kind, self._page_count + 1)
            self._fail(exc)
            return

        self._item_count += len(items)
        self._page_count += 1
        logger.debug(
            "%s page %d: %d items (total=%d, more=%s)",
            kind,
            self._page_count,
            len(items),
            self._item_count,
            page.has_more,
        )

        if page.continuation_token is None:
            self._has_more_items = False
            self._request = self._request.with_token(None)
            logger.info("%s complete: %d items in %d pages", kind, self._item_count, self._page_count)
            self._finish(None, FeedResult(item_count=self._item_count, page_count=self._page_count))
            return

        self._request = self._request.with_token(page.continuation_token)
        # A page is now scheduled; start() must not schedule a second one.
        self._started = True
        self._get_loop().call_soon(self._execute_page)

    def _fail(self, error: BaseException) -> None:
        self._error = error
        self._request = self._request.with_token(None)
        self._finish(error)

    def _finish(self, error: BaseException | None, result: FeedResult | None = None) -> None:
        self._completed = True
        callback, self._callback = self._callback, _noop
        try:
            if error is not None:
                callback(error)
            else:
                callback(None, result)
        except Exception:
            logger.exception("completion callback failed (%s feeder)", self.operation_kind.value)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def __repr__(self) -> str:
        return (
            f"FeederTask(kind={self.operation_kind.value}, items={self._item_count}, "
            f"pages={self._page_count}, more={self._has_more_items}, error={self._error!r})"
        )
