"""Tests for platform exception classification."""

import errno
import ipaddress
import socket

import httpx
import pytest

from faultclass.errors import (
    ADDR_ERROR,
    DNS_ERROR,
    ERRNO_ERROR,
    INVALID_ADDR_ERROR,
    NET_OP_ERROR,
    NET_PARSE_ERROR,
    NETWORK_ERROR,
    SYSCALL_ERROR,
    SYSTEM_ERROR,
    UNKNOWN_FAULT_ERROR,
    UNKNOWN_NETWORK_ERROR,
    Panic,
    find_system_error_class,
    get_class,
)


class TestSystemHierarchy:
    """Tests for the system class tree."""

    def test_all_under_system_root(self) -> None:
        """Test every platform class descends from SYSTEM_ERROR."""
        for error_class in (
            SYSCALL_ERROR,
            ERRNO_ERROR,
            NETWORK_ERROR,
            UNKNOWN_NETWORK_ERROR,
            ADDR_ERROR,
            INVALID_ADDR_ERROR,
            NET_OP_ERROR,
            NET_PARSE_ERROR,
            DNS_ERROR,
        ):
            assert error_class.is_a(SYSTEM_ERROR)
            assert not error_class.flags

    def test_network_tree(self) -> None:
        """Test the network classes nest as expected."""
        assert INVALID_ADDR_ERROR.is_a(ADDR_ERROR)
        assert ADDR_ERROR.is_a(NETWORK_ERROR)
        assert DNS_ERROR.is_a(NETWORK_ERROR)
        assert not DNS_ERROR.is_a(ADDR_ERROR)


class TestFindSystemErrorClass:
    """Tests for the platform-type table."""

    @pytest.mark.parametrize(
        ("exc", "expected"),
        [
            (socket.gaierror(socket.EAI_NONAME, "Name or service not known"), DNS_ERROR),
            (socket.herror(1, "Unknown host"), DNS_ERROR),
            (ipaddress.AddressValueError("bad address"), INVALID_ADDR_ERROR),
            (ipaddress.NetmaskValueError("bad netmask"), ADDR_ERROR),
            (ConnectionRefusedError(errno.ECONNREFUSED, "refused"), NET_OP_ERROR),
            (TimeoutError("timed out"), NET_OP_ERROR),
            (FileNotFoundError(errno.ENOENT, "missing"), ERRNO_ERROR),
            (OSError("no errno"), SYSCALL_ERROR),
            (ValueError("unrelated"), SYSTEM_ERROR),
        ],
    )
    def test_stdlib_exceptions(self, exc: BaseException, expected) -> None:
        """Test stdlib exceptions map to their classes."""
        assert find_system_error_class(exc) is expected

    def test_httpx_exceptions(self) -> None:
        """Test httpx exceptions map onto the network tree."""
        request = httpx.Request("GET", "https://example.invalid")
        assert find_system_error_class(httpx.ConnectError("refused", request=request)) is NET_OP_ERROR
        assert find_system_error_class(httpx.ReadTimeout("slow", request=request)) is NET_OP_ERROR
        assert (
            find_system_error_class(httpx.UnsupportedProtocol("gopher", request=request))
            is UNKNOWN_NETWORK_ERROR
        )
        assert find_system_error_class(httpx.InvalidURL("::")) is NET_PARSE_ERROR
        assert find_system_error_class(httpx.DecodingError("bad gzip", request=request)) is NETWORK_ERROR

    def test_non_exception_value(self) -> None:
        """Test values that are not exceptions default to SYSTEM_ERROR."""
        assert find_system_error_class(42) is SYSTEM_ERROR

    def test_get_class_uses_table(self) -> None:
        """Test get_class consults the table for unwrapped exceptions."""
        assert get_class(TimeoutError()) is NET_OP_ERROR
        assert NETWORK_ERROR.contains(TimeoutError())

    def test_get_class_of_panic(self) -> None:
        """Test panic carriers classify as unknown faults."""
        assert get_class(Panic("hooray!")) is UNKNOWN_FAULT_ERROR
