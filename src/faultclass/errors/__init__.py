"""错误体系：提供分层错误类、错误值及其数据附表。

Error hierarchy for faultclass.

Provides classification nodes (ErrorClass), the Error values wrapped under
them, a data side-table keyed by unique DataKeys, and the well-known classes
for system, programmer and unknown faults.
"""

from faultclass.errors.base import (
    HIERARCHICAL_ERROR,
    SYSTEM_ERROR,
    Error,
    ErrorClass,
    ErrorClassFlags,
    ErrorOption,
    get_class,
    get_data,
    get_exits,
    get_stack,
    new_class,
    new_class_explicit,
    new_class_with,
    new_class_without,
    record_exit,
    set_data,
    unwrap,
)
from faultclass.errors.classes import (
    CONFIG_ERROR,
    NOT_IMPLEMENTED_ERROR,
    PROGRAMMER_ERROR,
)
from faultclass.errors.data import DataKey, alloc_key
from faultclass.errors.stack import ExitRecord, capture_stack, log_with_stack
from faultclass.errors.system import (
    ADDR_ERROR,
    DNS_ERROR,
    ERRNO_ERROR,
    INVALID_ADDR_ERROR,
    NET_OP_ERROR,
    NET_PARSE_ERROR,
    NETWORK_ERROR,
    SYSCALL_ERROR,
    UNKNOWN_NETWORK_ERROR,
    find_system_error_class,
)
from faultclass.errors.unknown import (
    ORIGINAL_ERROR_KEY,
    UNKNOWN_FAULT_ERROR,
    Panic,
    adapt_unknown,
    original_error,
    panic,
)

__all__ = [
    # Roots
    "HIERARCHICAL_ERROR",
    "SYSTEM_ERROR",
    # Classes and values
    "Error",
    "ErrorClass",
    "ErrorClassFlags",
    "ErrorOption",
    "new_class",
    "new_class_explicit",
    "new_class_with",
    "new_class_without",
    # Inspection
    "get_class",
    "get_exits",
    "get_stack",
    "record_exit",
    "unwrap",
    # Data side-table
    "DataKey",
    "alloc_key",
    "get_data",
    "set_data",
    # Stacks
    "ExitRecord",
    "capture_stack",
    "log_with_stack",
    # Well-known classes
    "CONFIG_ERROR",
    "NOT_IMPLEMENTED_ERROR",
    "PROGRAMMER_ERROR",
    # System classification
    "ADDR_ERROR",
    "DNS_ERROR",
    "ERRNO_ERROR",
    "INVALID_ADDR_ERROR",
    "NET_OP_ERROR",
    "NET_PARSE_ERROR",
    "NETWORK_ERROR",
    "SYSCALL_ERROR",
    "UNKNOWN_NETWORK_ERROR",
    "find_system_error_class",
    # Unknown faults
    "ORIGINAL_ERROR_KEY",
    "UNKNOWN_FAULT_ERROR",
    "Panic",
    "adapt_unknown",
    "original_error",
    "panic",
]
