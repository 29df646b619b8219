"""错误类层次：提供可继承标志的分层错误分类与错误值。

Error classes and error values for faultclass.

An ErrorClass is a node in a forest of classification trees. Classes are
compared by identity, never by name. An Error pairs an underlying cause with
the class it was wrapped under, an optional stack snapshot and a data
side-table keyed by DataKey.

Two roots exist:
- SYSTEM_ERROR: generic platform-originated faults, no flags
- HIERARCHICAL_ERROR: application faults, captures a stack on creation
"""

from __future__ import annotations

import enum
import itertools
import threading
import weakref
from collections.abc import Callable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from faultclass.config import get_config
from faultclass.errors.stack import (
    ExitRecord,
    caller_record,
    capture_stack,
    log_with_stack,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from faultclass.errors.data import DataKey

ErrorOption = Callable[["Error"], None]
"""Producer applied to a freshly constructed Error (see set_data)."""


_class_counter = itertools.count(1)
_class_lock = threading.Lock()
_classes: weakref.WeakValueDictionary[int, ErrorClass] = weakref.WeakValueDictionary()


class ErrorClassFlags(enum.Flag):
    """Behaviour flags of an error class."""

    NONE = 0
    LOG_ON_CREATION = enum.auto()
    """Log the error with the current stack when it is created."""

    CAPTURE_STACK = enum.auto()
    """Capture a stack snapshot on the error when it is created."""


@dataclass(frozen=True, eq=False, repr=False)
class ErrorClass:
    """A named classification node.

    Flags are fixed at construction; they are never recomputed from the
    parent afterwards.

    Attributes:
        parent: Parent class, None for a root
        name: Display label
        flags: Effective behaviour flags
        serial: Creation order, used to resolve unpickled classes
    """

    parent: ErrorClass | None
    name: str
    flags: ErrorClassFlags = ErrorClassFlags.NONE
    serial: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        with _class_lock:
            serial = next(_class_counter)
            object.__setattr__(self, "serial", serial)
            _classes[serial] = self

    def __reduce__(self) -> tuple[object, ...]:
        return (_restore_class, (self.parent, self.name, self.flags, self.serial))

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"ErrorClass({self.name!r})"

    def __contains__(self, value: object) -> bool:
        return self.contains(value)

    def is_a(self, ancestor: ErrorClass | None) -> bool:
        """Check whether `ancestor` is this class or one of its parents."""
        check: ErrorClass | None = self
        while check is not None:
            if check is ancestor:
                return True
            check = check.parent
        return False

    def contains(self, value: object) -> bool:
        """Classify `value` and check whether it falls under this class."""
        return get_class(value).is_a(self)

    def new_class(self, name: str) -> ErrorClass:
        """Create a child class inheriting this class's flags."""
        return new_class(self, name)

    def wrap(
        self,
        cause: BaseException | str | None,
        *exemptions: ErrorClass,
        options: Iterable[ErrorOption] = (),
    ) -> Error | None:
        """Wrap a failure under this class.

        Wrapping is idempotent: an Error that already is this class, or is
        any of `exemptions`, is returned unchanged.

        Args:
            cause: Failure to wrap (exception or plain message)
            *exemptions: Classes that should pass through unwrapped
            options: Producers applied to the new Error (see set_data)

        Returns:
            The wrapping Error, the original Error, or None if cause is None
        """
        if cause is None:
            return None
        if isinstance(cause, Error):
            if cause.is_a(self):
                return cause
            for exempt in exemptions:
                if cause.is_a(exempt):
                    return cause
        return self._create(cause, options, skip=1)

    def new(
        self,
        message: str,
        *args: Any,
        options: Iterable[ErrorOption] = (),
    ) -> Error:
        """Create an Error of this class from a %-style message.

        Args:
            message: Message, formatted with `args` when any are given
            *args: Format arguments
            options: Producers applied to the new Error (see set_data)

        Returns:
            A new Error
        """
        text = message % args if args else message
        return self._create(text, options, skip=1)

    def _create(
        self,
        cause: BaseException | str,
        options: Iterable[ErrorOption],
        skip: int,
    ) -> Error:
        stack = None
        if ErrorClassFlags.CAPTURE_STACK in self.flags:
            stack = capture_stack(get_config().stack_capture_length, skip=skip + 1)
        error = Error(cause, self, stack=stack, options=options)
        if ErrorClassFlags.LOG_ON_CREATION in self.flags:
            log_with_stack(str(error))
        return error


def _restore_class(
    parent: ErrorClass | None, name: str, flags: ErrorClassFlags, serial: int
) -> ErrorClass:
    """Resolve an unpickled class to the live class it was pickled from.

    Classes are compared by identity, so within one process the original
    object is returned. Elsewhere an equivalent class is rebuilt.
    """
    error_class = _classes.get(serial)
    if (
        error_class is not None
        and error_class.name == name
        and error_class.parent is parent
    ):
        return error_class
    return ErrorClass(parent=parent, name=name, flags=flags)


class Error(Exception):
    """A failure tagged with an ErrorClass.

    Errors are raised like any other exception. Apart from the exit-path
    record, they are not modified after construction.
    """

    def __init__(
        self,
        cause: BaseException | str,
        error_class: ErrorClass,
        stack: bytes | None = None,
        options: Iterable[ErrorOption] = (),
    ) -> None:
        super().__init__(cause)
        self._cause = cause
        self._class = error_class
        self._stack = stack
        self._data: dict[DataKey, Any] = {}
        self._exits: list[ExitRecord] = []
        if isinstance(cause, BaseException):
            self.__cause__ = cause
        for option in options:
            option(self)

    def __reduce__(self) -> tuple[object, ...]:
        return (
            type(self),
            (self._cause, self._class, self._stack),
            {"_data": dict(self._data), "_exits": list(self._exits)},
        )

    @property
    def cause(self) -> BaseException | str:
        """The wrapped failure."""
        return self._cause

    @property
    def error_class(self) -> ErrorClass:
        """The class assigned at wrap time."""
        return self._class

    @property
    def stack(self) -> bytes | None:
        """Stack snapshot taken at wrap time, if the class captures one."""
        return self._stack

    @property
    def data(self) -> Mapping[DataKey, Any]:
        """Read-only view of the data side-table."""
        return MappingProxyType(self._data)

    @property
    def exits(self) -> tuple[ExitRecord, ...]:
        """Boundaries this error passed through, oldest first."""
        return tuple(self._exits)

    def is_a(self, error_class: ErrorClass | None) -> bool:
        """Check whether this error's class is, or descends from, `error_class`."""
        return self._class.is_a(error_class)

    def __str__(self) -> str:
        name = str(self._class)
        message = str(self._cause).rstrip("\n ")
        if "\n" in message:
            message = f"{name}:\n  " + message.replace("\n", "\n  ")
        else:
            message = f"{name}: {message}"
        if self._stack is None:
            return message
        stack = self._stack.decode("utf-8", errors="replace")
        return f"{message}\n\n{name} backtrace: {stack}"

    def __repr__(self) -> str:
        return f"Error({self._class.name!r}, {self._cause!r})"


# Base error classes. To construct your own error class, use new_class.
SYSTEM_ERROR = ErrorClass(parent=None, name="System Error")
HIERARCHICAL_ERROR = ErrorClass(
    parent=None, name="Error", flags=ErrorClassFlags.CAPTURE_STACK
)


def new_class_explicit(
    parent: ErrorClass | None, name: str, flags: ErrorClassFlags
) -> ErrorClass:
    """Create a class whose flags are exactly `flags`.

    The parent's flags are ignored.
    """
    return ErrorClass(parent=parent or HIERARCHICAL_ERROR, name=name, flags=flags)


def new_class_with(
    parent: ErrorClass | None, name: str, add: ErrorClassFlags
) -> ErrorClass:
    """Create a class with the parent's flags plus `add`."""
    parent = parent or HIERARCHICAL_ERROR
    return ErrorClass(parent=parent, name=name, flags=parent.flags | add)


def new_class_without(
    parent: ErrorClass | None, name: str, remove: ErrorClassFlags
) -> ErrorClass:
    """Create a class with the parent's flags minus `remove`."""
    parent = parent or HIERARCHICAL_ERROR
    return ErrorClass(parent=parent, name=name, flags=parent.flags & ~remove)


def new_class(parent: ErrorClass | None, name: str) -> ErrorClass:
    """Create a class inheriting the parent's flags unchanged.

    Args:
        parent: Parent class (default: HIERARCHICAL_ERROR)
        name: Display label

    Returns:
        The new class

    Example:
        >>> FRUIT_ERROR = new_class(None, "fruit")
        >>> APPLE_ERROR = FRUIT_ERROR.new_class("apple")
        >>> APPLE_ERROR.is_a(FRUIT_ERROR)
        True
    """
    parent = parent or HIERARCHICAL_ERROR
    return ErrorClass(parent=parent, name=name, flags=parent.flags)


def set_data(key: DataKey, value: Any) -> ErrorOption:
    """Attach `value` under `key` when an Error is created.

    Example:
        >>> REQUEST_KEY = alloc_key("request")
        >>> err = HIERARCHICAL_ERROR.new("boom", options=[set_data(REQUEST_KEY, 42)])
        >>> get_data(err, REQUEST_KEY)
        42
    """

    def apply(error: Error) -> None:
        error._data[key] = value

    return apply


def get_data(value: object, key: DataKey, default: Any = None) -> Any:
    """Look up `key` in an Error's data side-table.

    Returns `default` for values that are not Errors or lack the key.
    """
    if not isinstance(value, Error):
        return default
    return value._data.get(key, default)


def get_class(value: object) -> ErrorClass:
    """Classify any value against the error class hierarchy.

    Errors report their own class; unknown-fault carriers report
    UNKNOWN_FAULT_ERROR; anything else goes through the platform-type table.
    """
    if isinstance(value, Error):
        return value.error_class

    from faultclass.errors.system import find_system_error_class
    from faultclass.errors.unknown import UNKNOWN_FAULT_ERROR, Panic

    if isinstance(value, Panic):
        return UNKNOWN_FAULT_ERROR
    return find_system_error_class(value)


def unwrap(value: object) -> object:
    """Return the cause wrapped by an Error, or the value itself."""
    if isinstance(value, Error):
        return value.cause
    return value


def get_stack(value: object) -> str:
    """Return an Error's captured stack as text, or an empty string."""
    if isinstance(value, Error) and value.stack is not None:
        return value.stack.decode("utf-8", errors="replace")
    return ""


def get_exits(value: object) -> tuple[ExitRecord, ...]:
    """Return the exit-path record of an Error (empty for other values)."""
    if isinstance(value, Error):
        return value.exits
    return ()


def record_exit(error: Error, skip: int = 0) -> ExitRecord | None:
    """Append the caller's location to an Error's exit path.

    Args:
        error: Error passing through a boundary
        skip: Extra frames above the caller to skip

    Returns:
        The appended record, or None if the stack is shallower than requested
    """
    record = caller_record(skip + 1)
    if record is not None:
        error._exits.append(record)
    return record
