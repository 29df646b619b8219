"""
Well-known application error classes.
"""

from __future__ import annotations

from faultclass.errors.base import (
    ErrorClassFlags,
    new_class_with,
    new_class_without,
)

NOT_IMPLEMENTED_ERROR = new_class_with(
    None, "Not Implemented Error", ErrorClassFlags.LOG_ON_CREATION
)
PROGRAMMER_ERROR = new_class_with(
    None, "Programmer Error", ErrorClassFlags.LOG_ON_CREATION
)

# Raised while the configuration itself is being read, so it must not
# consult the configuration for a capture length.
CONFIG_ERROR = new_class_without(
    None, "Config Error", ErrorClassFlags.CAPTURE_STACK
)
