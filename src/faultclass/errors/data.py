"""
Process-wide unique keys for the error data side-table.

Keys are compared by identity, so two keys allocated with the same name
never collide.
"""

from __future__ import annotations

import itertools
import threading
import weakref
from dataclasses import dataclass

_counter = itertools.count(1)
_counter_lock = threading.Lock()
_keys: weakref.WeakValueDictionary[int, DataKey] = weakref.WeakValueDictionary()


@dataclass(frozen=True, eq=False)
class DataKey:
    """Opaque key for attaching data to an Error.

    Attributes:
        name: Optional label, only used for display
        serial: Issue order of the key
    """

    name: str = ""
    serial: int = 0

    def __repr__(self) -> str:
        if self.name:
            return f"DataKey({self.name!r}, #{self.serial})"
        return f"DataKey(#{self.serial})"

    def __reduce__(self) -> tuple[object, ...]:
        return (_restore_key, (self.name, self.serial))


def _restore_key(name: str, serial: int) -> DataKey:
    """Resolve an unpickled key to the live key with the same serial, if any."""
    key = _keys.get(serial)
    if key is not None and key.name == name:
        return key
    return DataKey(name=name, serial=serial)


def alloc_key(name: str = "") -> DataKey:
    """Allocate a new unique data key.

    Args:
        name: Optional label for debugging output

    Returns:
        A key distinct from every other key in the process
    """
    with _counter_lock:
        serial = next(_counter)
        key = DataKey(name=name, serial=serial)
        _keys[serial] = key
    return key
