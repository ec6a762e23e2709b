"""Unit tests for configuration settings."""

import pytest
from pydantic import ValidationError

from config import settings as settings_module
from config.settings import FALLBACK_VERSION, Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_default_values(self, clean_env):
        """Test default configuration values with an empty environment."""
        settings = Settings(_env_file=None)

        assert settings.server_name == "counter-mcp-server"
        assert settings.server_version == ""
        assert settings.log_level == "INFO"
        assert settings.counter_bits == 32
        assert settings.overflow_policy == "wrap"

    def test_custom_values(self, clean_env, temp_env):
        """Test setting custom configuration values."""
        temp_env(
            SERVER_NAME="my-counter",
            SERVER_VERSION="2.0.0",
            LOG_LEVEL="debug",
            COUNTER_BITS="64",
            OVERFLOW_POLICY="saturate",
        )

        settings = Settings(_env_file=None)

        assert settings.server_name == "my-counter"
        assert settings.server_version == "2.0.0"
        assert settings.log_level == "DEBUG"
        assert settings.counter_bits == 64
        assert settings.overflow_policy == "saturate"

    def test_case_insensitive_env_vars(self, clean_env, temp_env):
        """Test that environment variables are case insensitive."""
        temp_env(server_name="lower", Overflow_Policy="error")

        settings = Settings(_env_file=None)

        assert settings.server_name == "lower"
        assert settings.overflow_policy == "error"

    def test_invalid_counter_bits(self, clean_env):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, counter_bits=16)

        assert exc_info.value.errors()[0]["loc"][0] == "counter_bits"

    def test_invalid_overflow_policy(self, clean_env):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, overflow_policy="explode")

        assert exc_info.value.errors()[0]["loc"][0] == "overflow_policy"

    def test_invalid_log_level(self, clean_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_explicit_version_wins(self, clean_env):
        settings = Settings(_env_file=None, server_version="3.1.4")

        assert settings.resolved_version == "3.1.4"

    def test_version_falls_back_when_not_installed(self, clean_env, monkeypatch):
        def not_installed(name):
            raise settings_module.PackageNotFoundError(name)

        monkeypatch.setattr(settings_module, "version", not_installed)

        assert Settings(_env_file=None).resolved_version == FALLBACK_VERSION

    def test_version_from_distribution(self, clean_env, monkeypatch):
        monkeypatch.setattr(settings_module, "version", lambda name: "7.7.7")

        assert Settings(_env_file=None).resolved_version == "7.7.7"

    def test_env_file_loading(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("SERVER_NAME=from-dotenv\nOVERFLOW_POLICY=error\nUNRELATED=ignored\n")

        settings = Settings(_env_file=env_file)

        assert settings.server_name == "from-dotenv"
        assert settings.overflow_policy == "error"
