# src/page_feeder/sources/json_file.py

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..core.models import DEFAULT_TOKEN_FIELD, Page
from ..errors import PageFetchError

logger = logging.getLogger(__name__)


class JsonFilePageSource:
    """
    Pages through a JSON array stored on disk.

    The continuation token is the integer offset of the next page.
    Params:
    - Limit: page size override
    - filter: {key: value} equality filter (query only), applied per page
      after the read, so a page can be empty and still carry a token
    """

    def __init__(
        self,
        path: str | Path,
        *,
        page_size: int = 100,
        token_field: str = DEFAULT_TOKEN_FIELD,
    ) -> None:
        self.path = Path(path)
        self.page_size = max(1, int(page_size))
        self.token_field = token_field
        self._rows: list[Any] | None = None

    async def scan(self, params: dict[str, Any]) -> Page:
        rows = await self._load()
        return self._slice(rows, params)

    async def query(self, params: dict[str, Any]) -> Page:
        rows = await self._load()
        page = self._slice(rows, params)

        flt = params.get("filter") or {}
        if not isinstance(flt, Mapping):
            raise PageFetchError("query filter must be a mapping", operation_kind="query")

        items = [
            row
            for row in page.items
            if isinstance(row, Mapping) and all(row.get(k) == v for k, v in flt.items())
        ]
        return Page(items=items, continuation_token=page.continuation_token)

    def _slice(self, rows: list[Any], params: dict[str, Any]) -> Page:
        try:
            offset = int(params.get(self.token_field) or 0)
            limit = max(1, int(params.get("Limit") or self.page_size))
        except (TypeError, ValueError) as exc:
            raise PageFetchError(f"bad paging params: {exc}") from exc

        end = offset + limit
        token = end if end < len(rows) else None
        return Page(items=rows[offset:end], continuation_token=token)

    async def _load(self) -> list[Any]:
        if self._rows is not None:
            return self._rows

        try:
            raw = await asyncio.to_thread(self.path.read_text, "utf-8")
            data = json.loads(raw)
        except (OSError, ValueError) as exc:
            raise PageFetchError(f"cannot read {self.path}: {exc}") from exc

        if not isinstance(data, list):
            raise PageFetchError(f"{self.path} must contain a JSON array, got {type(data).__name__}")

        logger.info("Loaded %d rows from %s", len(data), self.path)
        self._rows = data
        return data
