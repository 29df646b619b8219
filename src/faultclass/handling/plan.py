"""结构化异常处理：按注册顺序匹配错误类并保证 finally 执行。

Structured fault handling over the error class hierarchy.

A Plan protects one block of code. Handlers are matched in registration
order, first match wins, so subclass handlers belong before their parents
and catch_all belongs last. Cleanups registered with finally_ always run,
whether the block succeeded, a handler consumed the fault, or a handler
raised a new one.

Faults are classified by payload:
- Error: matched against typed handlers and the wildcard
- Other exceptions: only the wildcard can match (they were never classified)
- Panic payloads: adapted into UNKNOWN_FAULT_ERROR, then matched like Errors

A fault raised by a handler or a cleanup replaces the fault being handled.
The replaced fault is lost, so keep cleanups from raising.

Example:
    >>> run(load_fruit).catch(
    ...     APPLE_ERROR, lambda e: print("apple", e)
    ... ).catch_all(
    ...     lambda e: print("other", e)
    ... ).finally_(
    ...     lambda: print("done")
    ... ).execute()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, NoReturn

from faultclass.errors.base import Error, record_exit, set_data
from faultclass.errors.classes import PROGRAMMER_ERROR
from faultclass.errors.unknown import (
    ORIGINAL_ERROR_KEY,
    UNKNOWN_FAULT_ERROR,
    Panic,
    adapt_unknown,
    panic,
)
from faultclass.telemetry.logger import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from faultclass.errors.base import ErrorClass

logger = get_logger("faultclass.handling")


def _noop() -> None:
    pass


@dataclass
class _Check:
    """One registered handler; `match` is None for the wildcard."""

    match: ErrorClass | None
    handler: Callable[[Any], None]

    def matches(self, error_class: ErrorClass) -> bool:
        return self.match is None or error_class.is_a(self.match)


class Plan:
    """A one-shot protected execution of a block.

    Nothing runs until execute() is called.
    """

    def __init__(self, main: Callable[[], object]) -> None:
        """Initialize a plan.

        Args:
            main: The protected block
        """
        self._main = main
        self._catch: list[_Check] = []
        self._finally: Callable[[], None] = _noop
        self._executed = False

    def catch(
        self, kind: ErrorClass | None, handler: Callable[[Error], None]
    ) -> Plan:
        """Handle Errors that are `kind` or one of its subclasses.

        Args:
            kind: Class to match; None matches any fault, like catch_all
            handler: Called with the matching Error

        Returns:
            This plan
        """
        self._catch.append(_Check(match=kind, handler=handler))
        return self

    def catch_all(self, handler: Callable[[Exception], None]) -> Plan:
        """Handle any fault not consumed by an earlier handler.

        Args:
            handler: Called with the Error, plain exception, or adapted
                UNKNOWN_FAULT_ERROR

        Returns:
            This plan
        """
        self._catch.append(_Check(match=None, handler=handler))
        return self

    def finally_(self, cleanup: Callable[[], None]) -> Plan:
        """Register a cleanup that always runs.

        Cleanups nest like try/finally blocks: the most recently registered
        one runs first, and earlier ones still run if it raises.

        Args:
            cleanup: Callable run after the block and any handler

        Returns:
            This plan
        """
        previous = self._finally

        def chained() -> None:
            try:
                cleanup()
            finally:
                previous()

        self._finally = chained
        return self

    def execute(self) -> None:
        """Run the block, dispatch any fault, then run cleanups.

        Raises:
            Exception: The fault if no handler consumed it, or whatever a
                handler or cleanup raised
            Error: PROGRAMMER_ERROR if the plan was already executed
        """
        if self._executed:
            raise PROGRAMMER_ERROR.new("plan executed more than once")
        self._executed = True

        try:
            try:
                self._main()
            except Error as err:
                # where the fault left this boundary; repeated if rethrown
                record_exit(err, skip=1)
                if not self._dispatch_classified(err):
                    self._log_unconsumed(err)
                    raise
            except Panic as fault:
                if not self._dispatch_unknown(fault.value):
                    self._log_unconsumed(fault)
                    raise
            except Exception as exc:
                if not self._dispatch_plain(exc):
                    self._log_unconsumed(exc)
                    raise
        finally:
            self._finally()

    def _dispatch_classified(self, err: Error) -> bool:
        for check in self._catch:
            if check.matches(err.error_class):
                check.handler(err)
                return True
        return False

    def _dispatch_plain(self, exc: Exception) -> bool:
        for check in self._catch:
            if check.match is None:
                check.handler(exc)
                return True
        return False

    def _dispatch_unknown(self, value: object) -> bool:
        for check in self._catch:
            if check.matches(UNKNOWN_FAULT_ERROR):
                check.handler(adapt_unknown(value))
                return True
        return False

    def _log_unconsumed(self, fault: Exception) -> None:
        logger.debug(
            "Fault not handled, propagating",
            fault_type=type(fault).__name__,
            handlers=len(self._catch),
        )


def run(main: Callable[[], object]) -> Plan:
    """Begin a plan protecting `main`.

    Args:
        main: The protected block

    Returns:
        A plan to configure; call execute() to run it
    """
    return Plan(main)


def repanic(error: object) -> NoReturn:
    """Raise `error` again, unwrapping adapted unknown faults.

    An UNKNOWN_FAULT_ERROR built from a panic payload re-raises that payload,
    so it reaches outer plans exactly as it was first raised. Every other
    value is raised unchanged.

    Args:
        error: Fault received by a handler

    Raises:
        Error: PROGRAMMER_ERROR if an UNKNOWN_FAULT_ERROR carries no payload
    """
    if not isinstance(error, Error) or not error.is_a(UNKNOWN_FAULT_ERROR):
        panic(error)
    if ORIGINAL_ERROR_KEY not in error.data:
        raise PROGRAMMER_ERROR.new(
            "misuse of plan internals: %s has no original payload",
            error.error_class,
            options=[set_data(ORIGINAL_ERROR_KEY, error)],
        )
    panic(error.data[ORIGINAL_ERROR_KEY])
