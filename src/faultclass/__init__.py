"""分层错误分类与结构化异常处理。

faultclass: hierarchical error classes with structured fault handling.

Wrap failures into Errors tagged with inheritable ErrorClasses, then protect
blocks of code with a Plan that dispatches faults to the first matching
handler and always runs its cleanups.
"""
from __future__ import annotations

from faultclass.config import ErrorsConfig, configure, get_config, reset_config
from faultclass.errors import (
    HIERARCHICAL_ERROR,
    NOT_IMPLEMENTED_ERROR,
    ORIGINAL_ERROR_KEY,
    PROGRAMMER_ERROR,
    SYSTEM_ERROR,
    UNKNOWN_FAULT_ERROR,
    DataKey,
    Error,
    ErrorClass,
    ErrorClassFlags,
    Panic,
    alloc_key,
    get_class,
    get_data,
    get_exits,
    get_stack,
    new_class,
    new_class_explicit,
    new_class_with,
    new_class_without,
    original_error,
    panic,
    set_data,
    unwrap,
)
from faultclass.handling import Plan, repanic, run

__version__ = "0.1.0"

__all__ = [
    # Config
    "ErrorsConfig",
    "configure",
    "get_config",
    "reset_config",
    # Error classes
    "ErrorClass",
    "ErrorClassFlags",
    "HIERARCHICAL_ERROR",
    "NOT_IMPLEMENTED_ERROR",
    "PROGRAMMER_ERROR",
    "SYSTEM_ERROR",
    "UNKNOWN_FAULT_ERROR",
    "new_class",
    "new_class_explicit",
    "new_class_with",
    "new_class_without",
    # Error values
    "DataKey",
    "Error",
    "ORIGINAL_ERROR_KEY",
    "alloc_key",
    "get_class",
    "get_data",
    "get_exits",
    "get_stack",
    "original_error",
    "set_data",
    "unwrap",
    # Handling
    "Panic",
    "Plan",
    "panic",
    "repanic",
    "run",
    # Version
    "__version__",
]
