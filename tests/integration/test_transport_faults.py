"""
Integration tests for faults raised by an HTTP transport.

Requests go through a real httpx.Client with responses mocked by pytest-httpx.
"""

import httpx
import pytest

from faultclass.errors import (
    NET_OP_ERROR,
    NETWORK_ERROR,
    Error,
    get_class,
    new_class,
    unwrap,
)
from faultclass.handling import run

FRUIT_SERVICE_ERROR = new_class(None, "fruit service")


def fetch(url: str) -> str:
    """GET `url` and raise for error statuses."""
    with httpx.Client(timeout=5.0) as client:
        response = client.get(url)
        response.raise_for_status()
        return response.text


def fetch_fruit(url: str) -> str:
    """Fetch from the fruit service, classifying transport faults."""
    try:
        return fetch(url)
    except httpx.HTTPError as exc:
        raise FRUIT_SERVICE_ERROR.wrap(exc) from exc


class TestTransportFaults:
    """Tests for classifying httpx faults inside plans."""

    def test_connect_error_caught_by_wildcard(
        self, fruit_url: str, mock_transport_error
    ) -> None:
        """Test an unclassified transport fault reaches catch_all."""
        mock_transport_error()
        caught: list[Exception] = []

        run(lambda: fetch(fruit_url)).catch(
            NETWORK_ERROR, lambda e: caught.append(e)
        ).catch_all(caught.append).execute()

        assert len(caught) == 1
        assert isinstance(caught[0], httpx.ConnectError)
        assert NETWORK_ERROR.contains(caught[0])
        assert get_class(caught[0]) is NET_OP_ERROR

    def test_wrapped_transport_error(self, fruit_url: str, mock_transport_error) -> None:
        """Test a wrapped transport fault keeps its cause and its class."""
        mock_transport_error(httpx.ReadTimeout, "slow fruit")
        caught: list[Error] = []

        run(lambda: fetch_fruit(fruit_url)).catch(
            FRUIT_SERVICE_ERROR, caught.append
        ).execute()

        assert len(caught) == 1
        err = caught[0]
        assert isinstance(unwrap(err), httpx.ReadTimeout)
        assert err.__cause__ is unwrap(err)
        assert str(err).startswith("fruit service: slow fruit")
        assert not NET_OP_ERROR.contains(err)

    def test_status_error_propagates(self, fruit_url: str, mock_status) -> None:
        """Test an unhandled status error leaves the plan after cleanup."""
        mock_status(503, "try later")
        cleaned: list[str] = []

        with pytest.raises(Error) as info:
            run(lambda: fetch_fruit(fruit_url)).catch(
                NET_OP_ERROR, lambda e: None
            ).finally_(lambda: cleaned.append("closed")).execute()

        assert info.value.is_a(FRUIT_SERVICE_ERROR)
        assert isinstance(unwrap(info.value), httpx.HTTPStatusError)
        assert NETWORK_ERROR.contains(unwrap(info.value))
        assert cleaned == ["closed"]

    def test_success_runs_no_handler(self, fruit_url: str, mock_status) -> None:
        """Test a successful request runs only cleanups."""
        mock_status(200, "apple")
        results: list[str] = []

        run(lambda: results.append(fetch_fruit(fruit_url))).catch_all(
            lambda e: results.append("handled")
        ).finally_(lambda: results.append("done")).execute()

        assert results == ["apple", "done"]
