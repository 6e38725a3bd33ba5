"""Tests for environment-driven settings."""

import pytest

from java_lens.config import DEFAULT_EXCLUDED_DIRS, DEFAULT_MAX_PARSE_BYTES, Settings
from java_lens.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("JAVA_LENS_MAX_PARSE_BYTES", "JAVA_LENS_EXCLUDED_DIRS", "JAVA_LENS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env()
        assert settings.max_parse_bytes == DEFAULT_MAX_PARSE_BYTES
        assert settings.excluded_dirs == DEFAULT_EXCLUDED_DIRS
        assert settings.log_level == "WARNING"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("JAVA_LENS_MAX_PARSE_BYTES", "2048")
        monkeypatch.setenv("JAVA_LENS_EXCLUDED_DIRS", "out,,gen")
        monkeypatch.setenv("JAVA_LENS_LOG_LEVEL", "debug")
        settings = Settings.from_env()
        assert settings.max_parse_bytes == 2048
        assert settings.excluded_dirs == ("out", "gen")
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["lots", "1.5", "0", "-3"])
    def test_bad_byte_limit(self, monkeypatch, raw):
        monkeypatch.setenv("JAVA_LENS_MAX_PARSE_BYTES", raw)
        with pytest.raises(ConfigError, match="JAVA_LENS_MAX_PARSE_BYTES"):
            Settings.from_env()

    def test_bad_log_level(self, monkeypatch):
        monkeypatch.setenv("JAVA_LENS_LOG_LEVEL", "chatty")
        with pytest.raises(ConfigError, match="JAVA_LENS_LOG_LEVEL"):
            Settings.from_env()
