# src/page_feeder/errors.py

from __future__ import annotations


class FeederError(Exception):
    """Base class for page_feeder errors."""


class PageFetchError(FeederError):
    """A page operation failed (transport or service error)."""

    def __init__(self, message: str, *, operation_kind: str | None = None) -> None:
        super().__init__(message)
        self.operation_kind = operation_kind


class WorkQueueClosedError(FeederError):
    """push() was called on a closed WorkQueue."""
