"""
Stack snapshots and exit-path records.

Snapshots are point-in-time reads of the current frames. Formatting beyond
plain traceback text is left to the logging layer.
"""

from __future__ import annotations

import inspect
import os
import traceback
from dataclasses import dataclass
from typing import TYPE_CHECKING

from faultclass.config import get_config
from faultclass.telemetry.logger import get_logger

if TYPE_CHECKING:
    from types import FrameType

_STACK_HEADER = "Stack (most recent call first):\n"

logger = get_logger("faultclass.errors")


@dataclass(frozen=True)
class ExitRecord:
    """Location of a boundary an error passed through.

    Attributes:
        filename: Source file of the boundary
        lineno: Line number at the time of recording
        function: Function name
    """

    filename: str
    lineno: int
    function: str

    def __str__(self) -> str:
        return f"{self.function}:{os.path.basename(self.filename)}:{self.lineno}"


def _frame_above(skip: int) -> FrameType | None:
    """Return the frame `skip` levels above the caller of the caller."""
    frame = inspect.currentframe()
    # this function and the public helper that called it
    for _ in range(skip + 2):
        if frame is None:
            return None
        frame = frame.f_back
    return frame


def capture_stack(limit: int, skip: int = 0) -> bytes:
    """Capture the current stack as traceback text.

    Args:
        limit: Maximum number of bytes to keep
        skip: Extra frames to drop above the caller (0 starts at the caller)

    Returns:
        UTF-8 encoded frames, innermost first, truncated to `limit` bytes
    """
    frame = _frame_above(skip)
    lines = traceback.format_stack(frame) if frame is not None else []
    # innermost first, so truncation drops the outermost frames
    text = _STACK_HEADER + "".join(reversed(lines))
    return text.encode("utf-8")[:limit]


def caller_record(skip: int = 0) -> ExitRecord | None:
    """Describe the caller's frame (or one `skip` levels above it)."""
    frame = _frame_above(skip)
    if frame is None:
        return None
    return ExitRecord(
        filename=frame.f_code.co_filename,
        lineno=frame.f_lineno,
        function=frame.f_code.co_name,
    )


def log_with_stack(message: str) -> None:
    """Log a message followed by the current stack.

    The stack is bounded by the configured `stack_log_length`.

    Args:
        message: Text to log ahead of the stack
    """
    stack = capture_stack(get_config().stack_log_length, skip=1)
    logger.error(f"{message}\n{stack.decode('utf-8', errors='replace')}")
