"""
Lucent Read Strategy - Shared Get Path
======================================

One read strategy serves all four variants; the variant passed in selects
between tracking or not, deep or shallow wrapping, and the mutable or
readonly list methods.

Resolution order for ``get(variant, target, key, receiver)``:

1. Flag keys (``__v_raw__``, ``__v_is_reactive__``...) are answered
   virtually and never reach the target.
2. List method names resolve to instrumented methods bound to the target
   and the receiver.
3. ``__dict__`` of an instance resolves to an ``OwnAttributes`` view, so
   ``name in obj.__dict__`` is an intercepted own-key check.
4. Everything else is read through ``reflect``; a ref target is read with
   itself as receiver so its own property sees the raw cell.
5. Built-in dunders and non-trackable keys return right away.
6. Mutable variants record a GET dependency.
7. Shallow variants return the value as stored.
8. Refs unwrap to their value, except at integer indices of a list.
9. Nested objects are wrapped lazily in the same access mode.
"""

from collections.abc import Mapping
from functools import partial
from typing import Any, Iterator

from .. import reflect
from ..classifier import Shape, is_skipped, shape_of
from ..constants import (
    FLAG_KEYS,
    MISSING,
    ReactiveFlags,
    TrackOpType,
    TriggerOpType,
    Variant,
)
from ..effect import track, trigger
from ..identity_cache import identity_cache
from ..ref import is_ref
from ..util import is_integer_key, is_object, is_untracked_key
from .instrumentations import MUTABLE_SEQUENCE_METHODS, READONLY_SEQUENCE_METHODS


class OwnAttributes(Mapping):
    """
    Live view of an instance's own attributes, read through its wrapper.

    Membership is the own-key check (recorded as a HAS dependency for mutable
    wrappers); iteration records an ITERATE dependency; item reads go through
    the wrapper's get path.
    """

    __slots__ = ("_target", "_receiver", "_handler")

    def __init__(self, target: Any, receiver: Any, handler: Any) -> None:
        self._target = target
        self._receiver = receiver
        self._handler = handler

    def __contains__(self, name: object) -> bool:
        return self._handler.has_own(self._target, name)

    def __getitem__(self, name: str) -> Any:
        if not reflect.has_own_key(self._target, name):
            raise KeyError(name)
        return self._handler.get(self._target, name, self._receiver)

    def __iter__(self) -> Iterator[str]:
        return iter(self._handler.own_keys(self._target))

    def __len__(self) -> int:
        return len(self._handler.own_keys(self._target))

    def __repr__(self):
        return f"OwnAttributes({dict(self.items())!r})"


class ReadStrategy:
    """Get-path logic shared by every variant."""

    def get(self, variant: Variant, target: Any, key: Any, receiver: Any, handler: Any) -> Any:
        if isinstance(key, str) and key in FLAG_KEYS:
            return self._flag(variant, target, key, receiver)

        target_shape = shape_of(target)
        if target_shape is Shape.SEQUENCE and isinstance(key, str):
            methods = (
                READONLY_SEQUENCE_METHODS if variant.readonly else MUTABLE_SEQUENCE_METHODS
            )
            method = methods.get(key)
            if method is not None:
                return partial(method, target, receiver)

        if target_shape is Shape.ATTRIBUTES and key == "__dict__":
            return OwnAttributes(target, receiver, handler)

        # dict subclasses with __missing__ (defaultdict) may insert on read
        inserts_on_miss = (
            target_shape is Shape.RECORD
            and hasattr(type(target), "__missing__")
            and key not in target
        )

        res = reflect.get_key(target, key, target if is_ref(target) else receiver)

        if inserts_on_miss and key in target:
            trigger(target, TriggerOpType.ADD, key, res)

        if is_untracked_key(key):
            return res

        if not variant.readonly:
            track(target, TrackOpType.GET, key)

        if variant.shallow or res is MISSING:
            return res

        if is_ref(res):
            if target_shape is Shape.SEQUENCE and is_integer_key(key):
                return res
            return res.value

        if is_object(res):
            # Import here to avoid circular imports
            from ..factory import to_reactive, to_readonly

            return to_readonly(res) if variant.readonly else to_reactive(res)

        return res

    def _flag(self, variant: Variant, target: Any, key: str, receiver: Any) -> Any:
        if key == ReactiveFlags.SKIP:
            return is_skipped(target)
        if key == ReactiveFlags.IS_REACTIVE:
            return not variant.readonly
        if key == ReactiveFlags.IS_READONLY:
            return variant.readonly
        if key == ReactiveFlags.IS_SHALLOW:
            return variant.shallow
        # RAW: only the canonical wrapper, or one whose class matches the
        # target's, may reveal the raw value.
        if receiver is identity_cache.lookup(target, variant):
            return target
        if getattr(receiver, "__class__", None) is target.__class__:
            return target
        return None

    def has_own(self, variant: Variant, target: Any, key: Any) -> bool:
        if not variant.readonly:
            track(target, TrackOpType.HAS, key)
        return reflect.has_own_key(target, key)


read_strategy = ReadStrategy()
