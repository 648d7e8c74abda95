"""
Lucent Classifier - Observability Eligibility
=============================================

Decides, from a value's runtime shape alone, whether it can be observed and
which proxy type wraps it.

Eligible values:
- ``dict`` (and subclasses): keyed records, wrapped by ``DictProxy``
- ``list`` (and subclasses): sequences, wrapped by ``ListProxy``
- instances of ordinary classes that carry a ``__dict__``: attribute
  records, wrapped by ``ObjectProxy``

``set`` is a hash collection and belongs to a separate layer. Everything
else (primitives, immutable containers, frozen dataclasses, slot-only
instances and intrinsic runtime objects) is ineligible and is handed back
unwrapped by the factory.

Skip marking:
    ``mark_skip(value)`` opts a single value out permanently. Setting the
    class attribute ``__v_skip__ = True`` opts out every instance of a class.
    ``dict`` and ``list`` cannot hold attributes or be weakly referenced, so
    the skip registry keeps a strong reference to such values; weakly
    referenceable values are dropped from the registry when collected.
"""

import asyncio
import concurrent.futures
import dataclasses
import datetime
import enum
import io
import pathlib
import re
import threading
import types
import weakref
from enum import Enum
from typing import Any, Dict

from .constants import ReactiveFlags
from .util import is_object

# ============================================================================
# TARGET TYPES
# ============================================================================


class TargetType(Enum):
    """Coarse classification used by the factory."""

    INVALID = 0
    COMMON = 1
    COLLECTION = 2


class Shape(Enum):
    """Trap family of an eligible COMMON target."""

    RECORD = "record"
    SEQUENCE = "sequence"
    ATTRIBUTES = "attributes"


_INTRINSIC_TYPES = (
    BaseException,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    re.Pattern,
    re.Match,
    asyncio.Future,
    concurrent.futures.Future,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    types.ModuleType,
    types.CoroutineType,
    types.GeneratorType,
    types.AsyncGeneratorType,
    type,
    enum.Enum,
    pathlib.PurePath,
    io.IOBase,
    range,
    slice,
    memoryview,
    bytearray,
    tuple,
    frozenset,
    types.MappingProxyType,
)


# ============================================================================
# SKIP REGISTRY
# ============================================================================


class SkipRegistry:
    """Process-wide record of values explicitly opted out of observation."""

    def __init__(self):
        self._marked: Dict[int, Any] = {}
        self._lock = threading.RLock()

    def mark(self, value: Any) -> None:
        key = id(value)
        with self._lock:
            try:
                entry = weakref.ref(value, lambda ref, key=key: self._discard(key, ref))
            except TypeError:
                entry = value
            self._marked[key] = entry

    def _discard(self, key: int, ref: "weakref.ref") -> None:
        with self._lock:
            if self._marked.get(key) is ref:
                del self._marked[key]

    def __contains__(self, value: Any) -> bool:
        entry = self._marked.get(id(value))
        if entry is None:
            return False
        if isinstance(entry, weakref.ref):
            return entry() is value
        return entry is value

    def __len__(self) -> int:
        return len(self._marked)


skip_registry = SkipRegistry()


def is_skipped(value: Any) -> bool:
    """True when the value, or its class, opted out of observation."""
    if value in skip_registry:
        return True
    return getattr(value, ReactiveFlags.SKIP, False) is True


# ============================================================================
# CLASSIFICATION
# ============================================================================


def is_extensible(value: Any) -> bool:
    """Whether new keys or attributes can be added to the value."""
    if isinstance(value, (dict, list, set)):
        return True
    if isinstance(value, (tuple, frozenset)):
        return False
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if value.__dataclass_params__.frozen:
            return False
    return hasattr(value, "__dict__")


def _raw_target_type(value: Any) -> TargetType:
    if isinstance(value, (dict, list)):
        return TargetType.COMMON
    if isinstance(value, set):
        return TargetType.COLLECTION
    if isinstance(value, _INTRINSIC_TYPES):
        return TargetType.INVALID
    if hasattr(value, "__dict__"):
        return TargetType.COMMON
    return TargetType.INVALID


def get_target_type(value: Any) -> TargetType:
    """Classify a value; pure apart from reading its flags."""
    if not is_object(value):
        return TargetType.INVALID
    if is_skipped(value) or not is_extensible(value):
        return TargetType.INVALID
    return _raw_target_type(value)


def shape_of(value: Any) -> Shape:
    """Trap family for a COMMON value (wrappers report their raw class)."""
    if isinstance(value, dict):
        return Shape.RECORD
    if isinstance(value, list):
        return Shape.SEQUENCE
    return Shape.ATTRIBUTES


def is_sequence(value: Any) -> bool:
    return isinstance(value, list)


def mark_skip(value: Any) -> Any:
    """
    Opt a value out of observation permanently and return it.

    Values that are already skipped or cannot be extended are returned
    untouched.

    Marked ``dict`` and ``list`` values cannot be weakly referenced, so the
    registry keeps them alive for the rest of the process. Prefer the
    ``__v_skip__`` class attribute for values created in large numbers.
    """
    if is_object(value) and not is_skipped(value) and is_extensible(value):
        skip_registry.mark(value)
    return value
