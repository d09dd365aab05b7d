# tests/test_idle.py

from __future__ import annotations

import pytest

from page_feeder.core.idle import resolve_idle_check

from .fakes import BacklogQueue, FlagQueue


def test_plain_list_uses_length() -> None:
    q: list[int] = []
    check = resolve_idle_check(q)
    assert check() is True
    q.append(1)
    assert check() is False


def test_sized_queue_uses_size() -> None:
    q = BacklogQueue(backlog=[1])
    check = resolve_idle_check(q)
    assert check() is False
    q.drain()
    assert check() is True


def test_idle_method_wins_over_size() -> None:
    class Both(FlagQueue):
        def size(self) -> int:
            return 5

    q = Both(is_idle=True)
    assert resolve_idle_check(q)() is True


def test_explicit_check_wins() -> None:
    q = BacklogQueue(backlog=[1])
    assert resolve_idle_check(q, lambda: True)() is True


def test_queue_without_idleness_signal_is_rejected() -> None:
    class PushOnly:
        def push(self, items) -> None:
            pass

    with pytest.raises(TypeError):
        resolve_idle_check(PushOnly())

    with pytest.raises(TypeError):
        resolve_idle_check([], is_idle=True)  # type: ignore[arg-type]
