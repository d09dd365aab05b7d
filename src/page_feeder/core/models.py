# src/page_feeder/core/models.py

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

DEFAULT_TOKEN_FIELD = "ExclusiveStartKey"


class OperationKind(StrEnum):
    """Which remote read operation a feeder issues for every page."""

    SCAN = "scan"
    QUERY = "query"


@dataclass(slots=True, frozen=True)
class PageRequest:
    """
    Immutable request value.

    params are forwarded verbatim to the page operation. The continuation token
    is kept apart and only merged in by to_params(), under token_field.
    """

    params: Mapping[str, Any] = field(default_factory=dict)
    continuation_token: Any | None = None
    token_field: str = DEFAULT_TOKEN_FIELD

    def to_params(self) -> dict[str, Any]:
        out = dict(self.params)
        if self.continuation_token is not None:
            out[self.token_field] = self.continuation_token
        else:
            out.pop(self.token_field, None)
        return out

    def with_token(self, token: Any | None) -> PageRequest:
        return replace(self, continuation_token=token)

    @classmethod
    def coerce(cls, request: PageRequest | Mapping[str, Any] | None, *, token_field: str | None = None) -> PageRequest:
        """Wrap a plain mapping; a token already present under token_field becomes the start token."""
        if isinstance(request, PageRequest):
            return request
        slot = token_field or DEFAULT_TOKEN_FIELD
        params = dict(request or {})
        token = params.pop(slot, None)
        return cls(params=params, continuation_token=token, token_field=slot)


@dataclass(slots=True, frozen=True)
class Page:
    """One batch of items. continuation_token is None when the source has no more pages."""

    items: Sequence[Any]
    continuation_token: Any | None = None

    @property
    def has_more(self) -> bool:
        return self.continuation_token is not None


@dataclass(slots=True, frozen=True)
class FeedResult:
    item_count: int
    page_count: int = 0
