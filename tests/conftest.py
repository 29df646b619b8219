"""Root pytest fixtures for faultclass tests."""

from __future__ import annotations

import io
from collections.abc import Iterator

import pytest

from faultclass.config import ENV_STACK_CAPTURE_LENGTH, ENV_STACK_LOG_LENGTH, reset_config
from faultclass.telemetry import FaultLogger, LogLevel


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against default configuration."""
    monkeypatch.delenv(ENV_STACK_CAPTURE_LENGTH, raising=False)
    monkeypatch.delenv(ENV_STACK_LOG_LENGTH, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    """Capture faultclass log output as text."""
    stream = io.StringIO()
    FaultLogger.configure(level=LogLevel.DEBUG, format="text", stream=stream)
    yield stream
    FaultLogger.configure()
