"""
Integration test fixtures.

Shared fixtures for driving mocked HTTP endpoints.
"""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest

FRUIT_URL = "https://api.example.test/v1/fruit"


@pytest.fixture
def fruit_url() -> str:
    """URL of the mocked fruit endpoint."""
    return FRUIT_URL


@pytest.fixture
def mock_transport_error(httpx_mock) -> Callable[..., None]:
    """Make the next request to the fruit endpoint fail at the transport layer."""

    def setup(
        exc_type: type[httpx.TransportError] = httpx.ConnectError,
        message: str = "connection refused",
    ) -> None:
        httpx_mock.add_exception(exc_type(message), url=FRUIT_URL)

    return setup


@pytest.fixture
def mock_status(httpx_mock) -> Callable[..., None]:
    """Make the next request to the fruit endpoint return a status code."""

    def setup(status_code: int, body: str = "") -> None:
        httpx_mock.add_response(url=FRUIT_URL, status_code=status_code, text=body)

    return setup
