"""
Shared test fixtures for series assembly tests.

All RECYCLE_* env vars are cleaned before each test and the working directory
is moved to tmp_path so neither a developer's environment nor a stray .env
file leaks into SeriesSettings.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

from pathlib import Path

import pytest
from sunseries.src.config import SeriesSettings

# All SeriesSettings environment variable names, used for cleanup.
_ALL_SERIES_ENV_VARS = (
    "RECYCLE_ELASTIC_URL",
    "RECYCLE_ELASTIC_USER_NAME",
    "RECYCLE_ELASTIC_PASSWORD",
    "RECYCLE_ELASTIC_INDEX",
    "RECYCLE_CACHE_DIR",
    "RECYCLE_PAGE_SIZE",
    "RECYCLE_SCROLL_KEEPALIVE",
    "RECYCLE_REQUEST_TIMEOUT_S",
)


@pytest.fixture(autouse=True)
def _clean_series_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove all series env vars and isolate from .env files before each test."""
    for var in _ALL_SERIES_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def env_vars_full(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set every SeriesSettings environment variable.

    Returns the dict of env var names to values for assertion convenience.
    """
    env = {
        "RECYCLE_ELASTIC_URL": "https://es.example.com:9200/",
        "RECYCLE_ELASTIC_USER_NAME": "reader",
        "RECYCLE_ELASTIC_PASSWORD": "s3cret",
        "RECYCLE_ELASTIC_INDEX": "pcs_test",
        "RECYCLE_CACHE_DIR": "/tmp/sunseries-cache",
        "RECYCLE_PAGE_SIZE": "500",
        "RECYCLE_SCROLL_KEEPALIVE": "30s",
        "RECYCLE_REQUEST_TIMEOUT_S": "15",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture()
def settings(tmp_path: Path) -> SeriesSettings:
    """SeriesSettings with credentials and a cache dir under tmp_path."""
    return SeriesSettings(
        elastic_url="http://es.test:9200",
        elastic_user_name="reader",
        elastic_password="s3cret",
        cache_dir=str(tmp_path / "jsons"),
    )
