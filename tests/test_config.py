#!/usr/bin/env python3
"""Tests for environment settings."""
import logging
from pathlib import Path

from taxzone.config import DEFAULT_DATA_DIR, Settings, parse_log_level


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.log_level == "WARNING"

    def test_default_dir_holds_bundled_city(self):
        assert (DEFAULT_DATA_DIR / "gothenburg.yaml").exists()

    def test_from_environment(self):
        settings = Settings.from_env(
            {"TAXZONE_DATA_DIR": "/srv/cities", "TAXZONE_LOG_LEVEL": "debug"}
        )
        assert settings.data_dir == Path("/srv/cities")
        assert settings.log_level == "debug"

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("TAXZONE_DATA_DIR", "/tmp/cities")
        assert Settings.from_env().data_dir == Path("/tmp/cities")


class TestParseLogLevel:
    """Tests for parse_log_level."""

    def test_known_names(self):
        assert parse_log_level("debug") == logging.DEBUG
        assert parse_log_level(" INFO ") == logging.INFO

    def test_unknown_falls_back_to_warning(self):
        assert parse_log_level("chatty") == logging.WARNING
