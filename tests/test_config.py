"""
Tests for configuration loading and validation.

Validates environment variable handling, defaults and validation rules.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from sequential_thinking.config import Settings, get_settings, reset_settings


class TestConfiguration:
    """Test suite for configuration management."""

    def test_settings_loads_with_defaults(self):
        """Settings should load with reasonable defaults."""
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

            assert settings.app_env == "development"
            assert settings.app_name == "sequential-thinking"
            assert settings.log_level == "INFO"
            assert settings.mcp_transport == "stdio"
            assert settings.host == "0.0.0.0"
            assert settings.port == 8007
            assert settings.log_thought_preview_chars == 80

    def test_settings_reads_environment(self):
        with patch.dict(
            os.environ,
            {
                "APP_ENV": "Production",
                "LOG_LEVEL": "warning",
                "MCP_TRANSPORT": "HTTP",
                "PORT": "9100",
            },
            clear=True,
        ):
            settings = Settings(_env_file=None)

            assert settings.app_env == "production"
            assert settings.log_level == "WARNING"
            assert settings.mcp_transport == "http"
            assert settings.port == 9100

    @pytest.mark.parametrize(
        "env",
        [
            {"LOG_LEVEL": "VERBOSE"},
            {"APP_ENV": "qa"},
            {"MCP_TRANSPORT": "grpc"},
            {"PORT": "70000"},
            {"LOG_THOUGHT_PREVIEW_CHARS": "2"},
        ],
    )
    def test_settings_rejects_invalid_values(self, env):
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ValidationError):
                Settings(_env_file=None)

    @pytest.mark.parametrize(
        "app_env,log_json,expected",
        [
            ("development", None, False),
            ("test", None, False),
            ("staging", None, True),
            ("production", None, True),
            ("production", False, False),
            ("development", True, True),
        ],
    )
    def test_json_logs_auto_detection(self, app_env, log_json, expected):
        settings = Settings(_env_file=None, app_env=app_env, log_json=log_json)
        assert settings.json_logs is expected

    def test_get_settings_is_cached(self):
        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first

    def test_get_settings_raises_on_invalid_environment(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "LOUD"}, clear=False):
            with pytest.raises(ValidationError):
                get_settings()
