# src/page_feeder/config.py

"""Settings loaded from environment variables (+ optional .env).

The feeder core never reads settings; only the CLI (composition root) does.
No value is required at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from .core.models import DEFAULT_TOKEN_FIELD

ENV_PREFIX = "PAGE_FEEDER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- logging ----
    log_level: str
    data_dir: Path

    # ---- feeding ----
    poll_interval_seconds: float
    workers: int
    page_size: int
    token_field: str

    @staticmethod
    def from_env() -> "Settings":
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/page_feeder"))

        poll_interval_seconds = max(0.001, _env_float(_k("POLL_INTERVAL_SECONDS"), 0.05))
        workers = max(1, _env_int(_k("WORKERS"), 4))
        page_size = max(1, _env_int(_k("PAGE_SIZE"), 100))
        token_field = _env(_k("TOKEN_FIELD"), DEFAULT_TOKEN_FIELD).strip() or DEFAULT_TOKEN_FIELD

        return Settings(
            log_level=log_level,
            data_dir=data_dir,
            poll_interval_seconds=poll_interval_seconds,
            workers=workers,
            page_size=page_size,
            token_field=token_field,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env (without overriding real env vars) once and build Settings."""
    load_dotenv(override=False)
    return Settings.from_env()
