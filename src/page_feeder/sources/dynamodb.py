# src/page_feeder/sources/dynamodb.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from ..core.models import Page
from ..errors import PageFetchError

logger = logging.getLogger(__name__)


def page_from_response(
    response: Mapping[str, Any],
    *,
    items_field: str = "Items",
    token_field: str = "LastEvaluatedKey",
) -> Page:
    """
    Map a DynamoDB-shaped response to a Page.

    Only an omitted (or null) LastEvaluatedKey means "no more pages".
    An empty Items list says nothing about continuation.
    """
    items = response.get(items_field) or []
    return Page(items=list(items), continuation_token=response.get(token_field))


class DynamoDbPageSource:
    """
    PageSource over a blocking client exposing scan(**params) / query(**params),
    e.g. boto3.client("dynamodb"). The client is injected, never created here.

    Calls run in a worker thread so the event loop (and queue consumers) keep going.
    """

    def __init__(
        self,
        client: Any,
        *,
        items_field: str = "Items",
        token_field: str = "LastEvaluatedKey",
    ) -> None:
        self._client = client
        self._items_field = items_field
        self._token_field = token_field

    async def scan(self, params: dict[str, Any]) -> Page:
        return await self._call("scan", params)

    async def query(self, params: dict[str, Any]) -> Page:
        return await self._call("query", params)

    async def _call(self, name: str, params: dict[str, Any]) -> Page:
        fn = getattr(self._client, name)
        try:
            response = await asyncio.to_thread(fn, **params)
        except Exception as exc:
            raise PageFetchError(f"DynamoDB {name} failed: {exc}", operation_kind=name) from exc

        if not isinstance(response, Mapping):
            raise PageFetchError(
                f"DynamoDB {name} returned {type(response).__name__}, expected a mapping",
                operation_kind=name,
            )

        page = page_from_response(response, items_field=self._items_field, token_field=self._token_field)
        logger.debug("DynamoDB %s: %d items, more=%s", name, len(page.items), page.has_more)
        return page
