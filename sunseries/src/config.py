"""
Series assembly configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
Every variable carries the ``RECYCLE_`` prefix (for example
``RECYCLE_ELASTIC_USER_NAME``) and may also come from a ``.env`` file.

Credentials default to empty so that settings can be built without them (the
cache-only path never touches the network); the fetcher calls
:meth:`SeriesSettings.require_credentials` before its first remote query.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

from __future__ import annotations

import re

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sunseries.src.exceptions import ConfigMissingError

_ES_TIME_UNIT = re.compile(r"^\d+(d|h|m|s|ms|micros|nanos)$")


class SeriesSettings(BaseSettings):
    """Configuration for fetching and caching irradiance documents.

    Attributes:
        elastic_url: Base URL of the Elasticsearch node.
        elastic_user_name: Basic-auth user name for the store.
        elastic_password: Basic-auth password for the store.
        elastic_index: Index holding the PCS telemetry documents.
        cache_dir: Directory for per-day JSON cache files, relative to the
            working directory unless absolute.
        page_size: Hits per search/scroll page (max 10000, the default
            index result window).
        scroll_keepalive: Idle lifetime of the scroll cursor, in
            Elasticsearch time units.
        request_timeout_s: Per-request timeout in seconds, or None to wait
            indefinitely.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECYCLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    elastic_url: str = "http://localhost:9200"
    elastic_user_name: str = ""
    elastic_password: str = ""
    elastic_index: str = "pcs_recyclekan"
    cache_dir: str = "jsons"
    page_size: int = 1000
    scroll_keepalive: str = "2m"
    request_timeout_s: float | None = None

    @field_validator("elastic_url")
    @classmethod
    def elastic_url_must_be_http(cls, v: str) -> str:
        """Validate the store URL scheme and drop any trailing slash."""
        if not v.lower().startswith(("http://", "https://")):
            raise ValueError(
                f"RECYCLE_ELASTIC_URL must start with http:// or https:// (got: '{v}')"
            )
        return v.rstrip("/")

    @field_validator("page_size")
    @classmethod
    def page_size_must_be_valid(cls, v: int) -> int:
        """Validate page size is between 1 and 10000."""
        if v < 1 or v > 10000:
            raise ValueError("RECYCLE_PAGE_SIZE must be >= 1 and <= 10000")
        return v

    @field_validator("scroll_keepalive")
    @classmethod
    def scroll_keepalive_must_be_time_unit(cls, v: str) -> str:
        """Validate the keepalive is an Elasticsearch duration such as ``2m``."""
        if not _ES_TIME_UNIT.match(v):
            raise ValueError(
                f"RECYCLE_SCROLL_KEEPALIVE must look like '2m' or '30s' (got: '{v}')"
            )
        return v

    @field_validator("request_timeout_s")
    @classmethod
    def request_timeout_must_be_positive(cls, v: float | None) -> float | None:
        """Validate the timeout is positive when set."""
        if v is not None and v <= 0:
            raise ValueError("RECYCLE_REQUEST_TIMEOUT_S must be > 0")
        return v

    def require_credentials(self) -> tuple[str, str]:
        """Return ``(user_name, password)`` or fail if either is unset.

        Raises:
            ConfigMissingError: If the user name or password is empty.
        """
        missing = [
            name
            for name, value in (
                ("RECYCLE_ELASTIC_USER_NAME", self.elastic_user_name),
                ("RECYCLE_ELASTIC_PASSWORD", self.elastic_password),
            )
            if not value
        ]
        if missing:
            raise ConfigMissingError(
                f"Missing store credentials: {', '.join(missing)}"
            )
        return self.elastic_user_name, self.elastic_password
