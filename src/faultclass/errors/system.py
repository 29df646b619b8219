"""系统错误映射：将平台异常类型映射到 SYSTEM_ERROR 下的错误类。

Platform exception classification.

Maps exceptions that were never wrapped in an Error (OS, socket, address
parsing and httpx transport failures) onto classes under SYSTEM_ERROR.
The table is static and ordered: the first matching entry wins, so more
specific exception types come first.
"""

from __future__ import annotations

import ipaddress
import socket

import httpx

from faultclass.errors.base import SYSTEM_ERROR, ErrorClass, new_class

# from os
SYSCALL_ERROR = new_class(SYSTEM_ERROR, "Syscall Error")
ERRNO_ERROR = new_class(SYSTEM_ERROR, "Errno Error")

# from socket / ipaddress / httpx
NETWORK_ERROR = new_class(SYSTEM_ERROR, "Network Error")
UNKNOWN_NETWORK_ERROR = new_class(NETWORK_ERROR, "Unknown Network Error")
ADDR_ERROR = new_class(NETWORK_ERROR, "Addr Error")
INVALID_ADDR_ERROR = new_class(ADDR_ERROR, "Invalid Addr Error")
NET_OP_ERROR = new_class(NETWORK_ERROR, "Network Op Error")
NET_PARSE_ERROR = new_class(NETWORK_ERROR, "Network Parse Error")
DNS_ERROR = new_class(NETWORK_ERROR, "DNS Error")

_SYSTEM_ERROR_TABLE: tuple[tuple[type[BaseException], ErrorClass], ...] = (
    # DNS resolution
    (socket.gaierror, DNS_ERROR),
    (socket.herror, DNS_ERROR),
    # Address parsing
    (ipaddress.AddressValueError, INVALID_ADDR_ERROR),
    (ipaddress.NetmaskValueError, ADDR_ERROR),
    # httpx
    (httpx.UnsupportedProtocol, UNKNOWN_NETWORK_ERROR),
    (httpx.InvalidURL, NET_PARSE_ERROR),
    (httpx.TransportError, NET_OP_ERROR),
    (httpx.HTTPError, NETWORK_ERROR),
    # Socket operations
    (ConnectionError, NET_OP_ERROR),
    (TimeoutError, NET_OP_ERROR),
)


def find_system_error_class(value: object) -> ErrorClass:
    """Find the class for an exception that was never wrapped.

    Args:
        value: Any value (normally an exception)

    Returns:
        Best matching class, SYSTEM_ERROR if nothing more specific applies
    """
    for exc_type, error_class in _SYSTEM_ERROR_TABLE:
        if isinstance(value, exc_type):
            return error_class

    if isinstance(value, OSError):
        if value.errno is not None:
            return ERRNO_ERROR
        return SYSCALL_ERROR

    return SYSTEM_ERROR
