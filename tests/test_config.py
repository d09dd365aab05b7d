# tests/test_config.py

from __future__ import annotations

from pathlib import Path

from page_feeder.config import Settings, get_settings


def test_defaults(clean_env) -> None:
    s = Settings.from_env()

    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/page_feeder")
    assert s.poll_interval_seconds == 0.05
    assert s.workers == 4
    assert s.page_size == 100
    assert s.token_field == "ExclusiveStartKey"


def test_env_overrides(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("PAGE_FEEDER_LOG_LEVEL", "debug")
    clean_env.setenv("PAGE_FEEDER_DATA_DIR", str(tmp_path))
    clean_env.setenv("PAGE_FEEDER_WORKERS", "8")
    clean_env.setenv("PAGE_FEEDER_PAGE_SIZE", "25")
    clean_env.setenv("PAGE_FEEDER_POLL_INTERVAL_SECONDS", "0.5")
    clean_env.setenv("PAGE_FEEDER_TOKEN_FIELD", "cursor")

    s = get_settings()

    assert s.log_level == "DEBUG"
    assert s.data_dir == tmp_path
    assert s.workers == 8
    assert s.page_size == 25
    assert s.poll_interval_seconds == 0.5
    assert s.token_field == "cursor"
    assert get_settings() is s


def test_bad_values_fall_back(clean_env) -> None:
    clean_env.setenv("PAGE_FEEDER_WORKERS", "many")
    clean_env.setenv("PAGE_FEEDER_PAGE_SIZE", "0")
    clean_env.setenv("PAGE_FEEDER_POLL_INTERVAL_SECONDS", "soon")

    s = Settings.from_env()

    assert s.workers == 4
    assert s.page_size == 1
    assert s.poll_interval_seconds == 0.05
