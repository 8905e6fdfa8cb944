"""
Unit tests for series configuration (SeriesSettings).

Tests verify:
- Config loads from RECYCLE_* environment variables with correct defaults.
- Missing credentials are reported by require_credentials, not at load time.
- URL, page size, keepalive, and timeout validation.

CHANGELOG:
- 2026-10-19: Initial creation

TODO:
- None
"""

import pytest
from pydantic import ValidationError
from sunseries.src.config import SeriesSettings
from sunseries.src.exceptions import ConfigMissingError


class TestSeriesSettingsLoadsFromEnv:
    """Config loads all values from environment variables."""

    def test_loads_all_env_vars(self, env_vars_full: dict[str, str]) -> None:
        """All env vars are read and assigned correctly."""
        settings = SeriesSettings()

        assert settings.elastic_url == "https://es.example.com:9200"
        assert settings.elastic_user_name == env_vars_full["RECYCLE_ELASTIC_USER_NAME"]
        assert settings.elastic_password == env_vars_full["RECYCLE_ELASTIC_PASSWORD"]
        assert settings.elastic_index == env_vars_full["RECYCLE_ELASTIC_INDEX"]
        assert settings.cache_dir == env_vars_full["RECYCLE_CACHE_DIR"]
        assert settings.page_size == 500
        assert settings.scroll_keepalive == "30s"
        assert settings.request_timeout_s == 15.0

    def test_defaults_applied_when_vars_missing(self) -> None:
        """Every setting has a default; no variable is required at load time."""
        settings = SeriesSettings()

        assert settings.elastic_url == "http://localhost:9200"
        assert settings.elastic_user_name == ""
        assert settings.elastic_password == ""
        assert settings.elastic_index == "pcs_recyclekan"
        assert settings.cache_dir == "jsons"
        assert settings.page_size == 1000
        assert settings.scroll_keepalive == "2m"
        assert settings.request_timeout_s is None

    def test_reads_dotenv_file(self, tmp_path) -> None:
        """Values in a .env file in the working directory are picked up."""
        (tmp_path / ".env").write_text(
            "RECYCLE_ELASTIC_USER_NAME=from-dotenv\nRECYCLE_ELASTIC_PASSWORD=pw\n",
            encoding="utf-8",
        )
        settings = SeriesSettings()

        assert settings.require_credentials() == ("from-dotenv", "pw")


class TestRequireCredentials:
    """Credentials are checked lazily, before the first remote query."""

    def test_returns_credentials_when_set(self, env_vars_full: dict[str, str]) -> None:
        assert SeriesSettings().require_credentials() == ("reader", "s3cret")

    def test_missing_both_raises(self) -> None:
        with pytest.raises(ConfigMissingError) as exc_info:
            SeriesSettings().require_credentials()
        message = str(exc_info.value)
        assert "RECYCLE_ELASTIC_USER_NAME" in message
        assert "RECYCLE_ELASTIC_PASSWORD" in message

    def test_missing_password_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RECYCLE_ELASTIC_USER_NAME", "reader")

        with pytest.raises(ConfigMissingError, match="RECYCLE_ELASTIC_PASSWORD"):
            SeriesSettings().require_credentials()


class TestValidation:
    """Field validators reject bad values at load time."""

    def test_non_http_url_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RECYCLE_ELASTIC_URL", "ftp://es.example.com")

        with pytest.raises(ValidationError) as exc_info:
            SeriesSettings()
        assert "http" in str(exc_info.value).lower()

    @pytest.mark.parametrize("value", ["0", "10001", "-5"])
    def test_page_size_out_of_range_rejected(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        monkeypatch.setenv("RECYCLE_PAGE_SIZE", value)

        with pytest.raises(ValidationError):
            SeriesSettings()

    def test_page_size_boundaries_accepted(self) -> None:
        assert SeriesSettings(page_size=1).page_size == 1
        assert SeriesSettings(page_size=10000).page_size == 10000

    @pytest.mark.parametrize("value", ["2 minutes", "m2", "", "2x"])
    def test_bad_keepalive_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError):
            SeriesSettings(scroll_keepalive=value)

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SeriesSettings(request_timeout_s=0)
