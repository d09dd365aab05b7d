# src/page_feeder/cli/main.py

"""
CLI entrypoint.

Initializes logging, pages a JSON array file through a FeederTask into a
WorkQueue whose workers print each item, waits for the queue to drain,
then reports the result.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Sequence

from ..config import Settings, get_settings
from ..core.models import FeedResult, OperationKind, PageRequest
from ..feeder.drain import wait_until_drained
from ..feeder.feeder_api import create_feeder
from ..logging_setup import setup_logging
from ..queues.work_queue import WorkQueue
from ..sources.json_file import JsonFilePageSource

logger = logging.getLogger(__name__)


def _parse_filter(pairs: Sequence[str]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        if not sep or not key.strip():
            raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {pair!r}")
        # Values are JSON when they parse (numbers, true/false, null), plain strings otherwise.
        try:
            value = json.loads(raw)
        except ValueError:
            value = raw
        out[key.strip()] = value
    return out


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="page-feeder",
        description="Feed a JSON array file, page by page, into a worker queue.",
    )
    p.add_argument("path", help="JSON file containing an array of items")
    p.add_argument(
        "--query",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="use the query operation with an equality filter (repeatable)",
    )
    p.add_argument("--page-size", type=int, default=settings.page_size)
    p.add_argument("--workers", type=int, default=settings.workers)
    p.add_argument("--log-level", default=settings.log_level)
    return p


async def run_feed(
    path: str,
    *,
    page_size: int,
    workers: int,
    query_filter: dict[str, Any] | None,
    poll_interval: float,
    token_field: str,
    out=None,
) -> tuple[BaseException | None, FeedResult | None]:
    """Feed `path` into a printing WorkQueue and wait until everything is consumed."""
    stream = out or sys.stdout
    outcome: dict[str, Any] = {"error": None, "result": None}

    def _on_done(error: BaseException | None, result: FeedResult | None = None) -> None:
        outcome["error"] = error
        outcome["result"] = result

    def _print_item(item: Any) -> None:
        stream.write(json.dumps(item, ensure_ascii=False) + "\n")

    source = JsonFilePageSource(path, page_size=page_size, token_field=token_field)
    queue = WorkQueue(_print_item, concurrency=workers, name="print")

    params: dict[str, Any] = {}
    kind = OperationKind.SCAN
    if query_filter:
        params["filter"] = query_filter
        kind = OperationKind.QUERY

    task = create_feeder(
        queue,
        PageRequest(params=params, token_field=token_field),
        _on_done,
        kind,
        source=source,
    ).start()

    try:
        await wait_until_drained(task, poll_interval=poll_interval)
    finally:
        await queue.close()

    return outcome["error"], outcome["result"]


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    console_level = getattr(logging, str(args.log_level).upper(), logging.INFO)
    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.debug("Logging to %s", log_file)

    try:
        query_filter = _parse_filter(args.query)
    except argparse.ArgumentTypeError as exc:
        logger.error("%s", exc)
        return 2

    error, result = asyncio.run(
        run_feed(
            args.path,
            page_size=args.page_size,
            workers=args.workers,
            query_filter=query_filter,
            poll_interval=settings.poll_interval_seconds,
            token_field=settings.token_field,
        )
    )

    if error is not None:
        logger.error("Feed failed: %s", error)
        return 1

    if result is None:
        logger.error("Feed finished without reporting a result")
        return 1

    logger.info("Fed %d items in %d pages", result.item_count, result.page_count)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
