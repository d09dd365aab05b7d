# src/page_feeder/core/idle.py

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from .ports import IdleQueue, SizedQueue

IdleCheck = Callable[[], bool]


def resolve_idle_check(queue: Any, is_idle: IdleCheck | None = None) -> IdleCheck:
    """
    Pick how "the destination queue is idle" is tested.

    Order:
    - explicit is_idle callable
    - queue.idle()        (work queue: no backlog and no active workers)
    - queue.size() == 0   (backlog only)
    - len(queue) == 0     (plain sequence)
    """
    if is_idle is not None:
        if not callable(is_idle):
            raise TypeError("is_idle must be callable")
        return is_idle

    if isinstance(queue, IdleQueue):
        return lambda: bool(queue.idle())

    if isinstance(queue, SizedQueue):
        return lambda: int(queue.size()) == 0

    if hasattr(queue, "__len__"):
        return lambda: len(queue) == 0

    raise TypeError(
        f"{type(queue).__name__} has no idleness signal; provide idle(), size(), __len__ or is_idle="
    )
