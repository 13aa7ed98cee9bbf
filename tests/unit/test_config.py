"""Tests for settings and logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from seek_pagination.config import Settings, configure_logging, get_settings, settings


class TestSettings:
    """Test Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("MISSING_PK_POLICY", raising=False)
        monkeypatch.delenv("DEFAULT_PAGE_SIZE", raising=False)

        config = Settings(_env_file=None)

        assert config.missing_pk_policy == "raise"
        assert config.default_page_size == 50
        assert config.max_page_size == 200

    def test_environment_override(self, monkeypatch):
        """Test values are read from the environment case-insensitively."""
        monkeypatch.setenv("MISSING_PK_POLICY", "NULLIFY")
        monkeypatch.setenv("max_page_size", "25")

        config = Settings(_env_file=None)

        assert config.missing_pk_policy == "nullify"
        assert config.max_page_size == 25

    def test_log_level_is_uppercased(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")

    def test_invalid_missing_pk_policy(self):
        with pytest.raises(ValidationError) as exc_info:
            Settings(missing_pk_policy="skip")

        assert "Missing pk policy must be one of" in str(exc_info.value)

    def test_get_settings_returns_global(self):
        assert get_settings() is settings


class TestConfigureLogging:
    """Test configure_logging."""

    def test_sets_root_level(self, test_settings):
        root = logging.getLogger()
        previous = root.level

        try:
            configure_logging(test_settings)

            assert root.level == logging.ERROR
        finally:
            root.setLevel(previous)
