"""
Lucent Constants - Flags, Operation Types and Variants
======================================================

Shared constants for the interception layer and the dependency engine.

String values are used for the operation types so that debugger events are
easy to read when printed.
"""

from enum import Enum


class TrackOpType(Enum):
    """Kinds of read access recorded by ``track``."""

    GET = "get"
    HAS = "has"
    ITERATE = "iterate"


class TriggerOpType(Enum):
    """Kinds of mutation announced by ``trigger``."""

    SET = "set"
    ADD = "add"
    DELETE = "delete"
    CLEAR = "clear"


class ReactiveFlags:
    """Virtual attribute names answered by every wrapper."""

    SKIP = "__v_skip__"
    IS_REACTIVE = "__v_is_reactive__"
    IS_READONLY = "__v_is_readonly__"
    IS_SHALLOW = "__v_is_shallow__"
    RAW = "__v_raw__"
    IS_REF = "__v_is_ref__"


FLAG_KEYS = frozenset(
    {
        ReactiveFlags.SKIP,
        ReactiveFlags.IS_REACTIVE,
        ReactiveFlags.IS_READONLY,
        ReactiveFlags.IS_SHALLOW,
        ReactiveFlags.RAW,
    }
)


class Variant(Enum):
    """
    Access mode of a wrapper: (mutable | readonly) x (deep | shallow).

    The value tuple is ``(readonly, shallow)``.
    """

    MUTABLE_DEEP = (False, False)
    MUTABLE_SHALLOW = (False, True)
    READONLY_DEEP = (True, False)
    READONLY_SHALLOW = (True, True)

    @property
    def readonly(self) -> bool:
        return self.value[0]

    @property
    def shallow(self) -> bool:
        return self.value[1]

    @property
    def label(self) -> str:
        """Name of the public constructor producing this variant."""
        base = "readonly" if self.readonly else "reactive"
        return f"shallow_{base}" if self.shallow else base

    @classmethod
    def of(cls, readonly: bool, shallow: bool) -> "Variant":
        return cls((readonly, shallow))


# ============================================================================
# SENTINEL KEYS
# ============================================================================


class _IterateKey:
    """Dependency key for "the key set of a record"."""

    def __repr__(self):
        return "ITERATE_KEY"


ITERATE_KEY = _IterateKey()

# Dependency key for the length of a sequence. List indices are ints, so a
# string cannot collide with them.
LENGTH_KEY = "length"


class _Missing:
    """Sentinel for "no such key" returned by the raw operations."""

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False


MISSING = _Missing()
