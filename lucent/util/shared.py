"""
Shared helpers for value inspection and change detection.
"""

import math
from typing import Any

from ..constants import ReactiveFlags

# Values that are never objects in the observable sense.
PRIMITIVE_TYPES = (type(None), bool, int, float, complex, str, bytes)

# Keys whose reads are never recorded as dependencies.
NON_TRACKABLE_KEYS = frozenset({"__class__", "__weakref__", ReactiveFlags.IS_REF})

# Python data-model names, the counterpart of well-known built-in symbols.
BUILTIN_DUNDERS = frozenset(
    name for name in dir(object) + dir(list) + dir(dict) if name.startswith("__")
) | frozenset(
    {
        "__await__",
        "__aiter__",
        "__anext__",
        "__enter__",
        "__exit__",
        "__aenter__",
        "__aexit__",
        "__call__",
        "__bool__",
        "__index__",
        "__fspath__",
        "__next__",
        "__missing__",
    }
)


def is_object(value: Any) -> bool:
    """Return True for anything that is not a primitive."""
    return not isinstance(value, PRIMITIVE_TYPES)


def is_integer_key(key: Any) -> bool:
    return isinstance(key, int) and not isinstance(key, bool)


def is_builtin_key(key: Any) -> bool:
    return isinstance(key, str) and key in BUILTIN_DUNDERS


def is_untracked_key(key: Any) -> bool:
    """Keys that bypass dependency recording on reads."""
    return isinstance(key, str) and (
        key in NON_TRACKABLE_KEYS or key in BUILTIN_DUNDERS
    )


def _is_nan(value: Any) -> bool:
    return isinstance(value, float) and math.isnan(value)


def has_changed(value: Any, old_value: Any) -> bool:
    """
    Decide whether a write actually changed a value.

    Primitives of the same type compare by value, with NaN equal to NaN.
    Everything else compares by identity.
    """
    if value is old_value:
        return False
    if (
        type(value) is type(old_value)
        and isinstance(value, PRIMITIVE_TYPES)
    ):
        if _is_nan(value) and _is_nan(old_value):
            return False
        return value != old_value
    return True
