"""
Shared test fixtures for the sequential thinking tests.

Provides fresh engines, raw input builders and isolation of the
process-wide engine used by the MCP tools.
"""

import os

import pytest

# Set test environment before importing the server
os.environ.update(
    {
        "APP_ENV": "test",
        "LOG_LEVEL": "DEBUG",
    }
)

from sequential_thinking.config import reset_settings
from sequential_thinking.models import ThoughtInput
from sequential_thinking.services import thinking_engine as engine_module
from sequential_thinking.services.thinking_engine import ThinkingEngine


@pytest.fixture(scope="function")
def engine():
    """Fresh engine with empty history for each test."""
    return ThinkingEngine()


@pytest.fixture(scope="function")
def shared_engine(monkeypatch):
    """
    Replace the process-wide engine with a fresh one.

    MCP tool tests go through get_thinking_engine(), so this keeps their
    history counts independent of test order.
    """
    fresh = ThinkingEngine()
    monkeypatch.setattr(engine_module, "_engine", fresh)
    return fresh


@pytest.fixture(scope="function")
def make_input():
    """
    Builder for raw thought input with sensible defaults.

    Any field can be overridden by keyword.
    """

    def _make(**overrides) -> ThoughtInput:
        fields = {
            "thought": "Consider the problem",
            "thought_number": 1,
            "total_thoughts": 3,
            "next_thought_needed": True,
        }
        fields.update(overrides)
        return ThoughtInput(**fields)

    return _make


@pytest.fixture(autouse=True)
def clean_settings():
    """Drop cached settings between tests."""
    reset_settings()
    yield
    reset_settings()
