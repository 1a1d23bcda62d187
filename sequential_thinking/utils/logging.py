"""
Structured logging configuration for the sequential thinking server.

This module provides centralized logging configuration using structlog,
with environment-specific formatting and truncation of thought text so
long reasoning steps do not flood the logs.

All output goes to stderr: when the server runs over the stdio transport,
stdout carries the MCP protocol stream.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

# Event dict keys that may hold caller-supplied thought text
THOUGHT_TEXT_KEYS = ("thought",)


class EnvironmentProcessor:
    """
    Add environment-specific fields to log entries.

    Includes app version and environment for deployment context.
    """

    def __init__(self, app_env: str, app_version: str):
        """Initialize with environment settings."""
        self.app_env = app_env
        self.app_version = app_version

    def __call__(
        self, logger: Any, method_name: str, event_dict: EventDict
    ) -> EventDict:
        """Add environment context to the event dict."""
        event_dict["env"] = self.app_env
        event_dict["version"] = self.app_version
        return event_dict


class ThoughtTruncationProcessor:
    """
    Shorten thought text carried in log entries.

    The engine treats thought text as opaque and unbounded; logs only
    need enough of it to correlate entries with a session.
    """

    def __init__(self, max_chars: int = 80):
        self.max_chars = max_chars

    def __call__(
        self, logger: Any, method_name: str, event_dict: EventDict
    ) -> EventDict:
        for key in THOUGHT_TEXT_KEYS:
            value = event_dict.get(key)
            if isinstance(value, str) and len(value) > self.max_chars:
                event_dict[key] = f"{value[: self.max_chars]}... ({len(value)} chars)"
        return event_dict


def configure_logging(
    log_level: str = "INFO",
    app_env: str = "development",
    app_version: str = "0.1.0",
    json_format: Optional[bool] = None,
    thought_preview_chars: int = 80,
) -> None:
    """
    Configure structured logging for the server.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        app_env: Application environment (development, staging, production)
        app_version: Application version for tracking
        json_format: Force JSON output (None = auto-detect based on environment)
        thought_preview_chars: Maximum thought text length kept in log entries
    """
    if json_format is None:
        json_format = app_env in ["staging", "production"]

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        EnvironmentProcessor(app_env, app_version),
        ThoughtTruncationProcessor(thought_preview_chars),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Colors would corrupt log files captured from stderr by MCP hosts
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (usually __name__ from the calling module)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)
