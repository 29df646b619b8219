"""
Unknown-fault adapter.

Python can only raise exceptions, so arbitrary values are raised through
`panic()`, which carries them in a Panic. When such a fault reaches a plan
handler it is adapted into an Error of UNKNOWN_FAULT_ERROR, with the original
value stored under ORIGINAL_ERROR_KEY.
"""

from __future__ import annotations

from typing import Any, NoReturn

from faultclass.errors.base import Error, new_class, set_data
from faultclass.errors.data import alloc_key

# Class of faults whose payload was neither an Error nor an exception,
# e.g. panic("hooray!")
UNKNOWN_FAULT_ERROR = new_class(None, "Unknown Error")

# Data key holding the original payload of an UNKNOWN_FAULT_ERROR
ORIGINAL_ERROR_KEY = alloc_key("original_error")


class Panic(Exception):
    """Carrier for a raised value that is not an exception.

    Attributes:
        value: The raised payload
    """

    def __init__(self, value: Any) -> None:
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"panic: {self.value!r}"


def panic(value: Any) -> NoReturn:
    """Raise any value as a fault.

    Exceptions are raised as they are; every other value is carried in a
    Panic.

    Args:
        value: Payload to raise
    """
    if isinstance(value, BaseException):
        raise value
    raise Panic(value)


def adapt_unknown(value: Any) -> Error:
    """Wrap a non-exception payload in an UNKNOWN_FAULT_ERROR.

    Args:
        value: Original payload

    Returns:
        Error whose ORIGINAL_ERROR_KEY data is `value`
    """
    return UNKNOWN_FAULT_ERROR.new(
        "%s", _describe(value), options=[set_data(ORIGINAL_ERROR_KEY, value)]
    )


def _describe(value: Any) -> str:
    """Render a payload for an error message, even if its __str__ raises."""
    try:
        return str(value)
    except Exception as exc:
        return f"{object.__repr__(value)} (str failed: {type(exc).__name__})"


def original_error(error: Any) -> Any:
    """Return the payload an adapted error was built from.

    Errors that were not adapted from a payload (and non-Error values) are
    returned unchanged.
    """
    if isinstance(error, Error) and ORIGINAL_ERROR_KEY in error.data:
        return error.data[ORIGINAL_ERROR_KEY]
    return error
