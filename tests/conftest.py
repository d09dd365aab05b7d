# tests/conftest.py

from __future__ import annotations

import os

import pytest

from page_feeder.config import get_settings

from .fakes import BacklogQueue, RecordingCallback


@pytest.fixture()
def queue() -> BacklogQueue:
    return BacklogQueue()


@pytest.fixture()
def callback() -> RecordingCallback:
    """
    Fresh recording callback.

    Created inside the test's event loop on first await; asyncio.Event binds lazily.
    """
    return RecordingCallback()


@pytest.fixture()
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Remove PAGE_FEEDER_* variables and reset the cached settings."""
    for name in list(os.environ):
        if name.startswith("PAGE_FEEDER_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()
