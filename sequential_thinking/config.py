"""
Environment configuration loader using Pydantic BaseSettings.

This module centralizes environment configuration for the sequential
thinking server. Settings are loaded from environment variables and an
optional .env file, and validated at startup to fail fast with clear errors.
"""

from typing import Literal, Optional

import structlog
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = structlog.get_logger(__name__)


class Settings(BaseSettings):
    """
    Server settings loaded from environment variables.

    Priority order for loading values:
    1. Environment variables (highest priority)
    2. .env file
    3. Default values defined here
    """

    # ===== Application Settings =====
    app_env: str = Field(
        default="development",
        description="Application environment (development/staging/production/test)",
    )

    app_name: str = Field(
        default="sequential-thinking",
        description="Server name advertised to MCP clients and used in logs",
    )

    app_version: str = Field(default="0.1.0", description="Application version")

    # ===== Logging =====
    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)"
    )

    log_json: Optional[bool] = Field(
        default=None,
        description="Force JSON log output (unset = JSON in staging/production only)",
    )

    log_thought_preview_chars: int = Field(
        default=80,
        description="Maximum characters of thought text included in log entries",
        ge=8,
        le=4096,
    )

    # ===== MCP Transport =====
    mcp_transport: Literal["stdio", "http"] = Field(
        default="stdio",
        description="Transport the MCP server listens on",
    )

    host: str = Field(default="0.0.0.0", description="Host to bind the HTTP transport to")

    port: int = Field(
        default=8007, description="Port for the HTTP transport", ge=1, le=65535
    )

    # ===== Validators =====

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v_upper

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Ensure app environment is valid."""
        valid_envs = ["development", "staging", "production", "test"]
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid app_env: {v}. Must be one of {valid_envs}")
        return v_lower

    @field_validator("mcp_transport", mode="before")
    @classmethod
    def normalize_transport(cls, v):
        """Accept transport names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    # ===== Pydantic Config =====

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def json_logs(self) -> bool:
        """Effective JSON logging flag after environment auto-detection."""
        if self.log_json is not None:
            return self.log_json
        return self.app_env in ["staging", "production"]

    def log_config(self) -> None:
        """Log the effective configuration."""
        logger.info("Configuration loaded", **self.model_dump())


# ===== Global Settings Instance =====

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton pattern).

    Settings are loaded and validated only once per process.
    """
    global _settings
    if _settings is None:
        try:
            _settings = Settings()
            _settings.log_config()
            logger.info(
                "Settings loaded successfully",
                app_env=_settings.app_env,
                app_version=_settings.app_version,
            )
        except ValidationError as e:
            logger.error("Failed to load settings", errors=e.errors())
            raise
        except Exception as e:
            logger.error("Unexpected error loading settings", error=str(e))
            raise

    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
