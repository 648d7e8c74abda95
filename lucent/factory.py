"""
Lucent Factory - Creating Wrappers
==================================

The factory is the only way wrappers come into existence. Given a raw value
and a variant it returns the cached wrapper for that pair, builds a new one,
or hands the value back untouched when it cannot be observed.

Key Features:
- At most one live wrapper per raw value and variant
- Readonly wins: ``reactive(readonly(x))`` is the readonly wrapper itself
- ``readonly(reactive(x))`` layers a readonly view over the reactive one
- ``to_raw`` peels every layer back to the raw value
- Ineligible values are returned unchanged, with a development warning when
  wrapping was requested explicitly

Example:
    ```python
    state = reactive({"user": {"name": "Ada"}})
    view = readonly(state)

    state["user"]["name"] = "Grace"   # notifies dependents
    view["user"]["name"] = "Linus"    # warns, nothing changes
    to_raw(view) is to_raw(state)     # True
    ```
"""

import logging
from typing import Any, Callable, Dict, TypeVar

from .classifier import TargetType, get_target_type, mark_skip, shape_of
from .constants import ReactiveFlags, Variant
from .flags import is_proxy, is_reactive, is_readonly, is_shallow, to_raw
from .handlers import handler_for
from .identity_cache import identity_cache
from .proxies import proxy_class_for
from .util import is_object
from .warning import warn

T = TypeVar("T")

logger = logging.getLogger("lucent")


def _create_reactive_object(target: Any, variant: Variant, quiet: bool = False) -> Any:
    kind = "readonly" if variant.readonly else "reactive"
    if not is_object(target):
        if not quiet:
            warn(f"value cannot be made {kind}:", target)
        return target

    # Already a wrapper. Only a readonly view over a reactive wrapper may
    # stack on top of it.
    if getattr(target, ReactiveFlags.RAW, None) is not None and not (
        variant.readonly and getattr(target, ReactiveFlags.IS_REACTIVE, False)
    ):
        return target

    target_type = get_target_type(target)
    if target_type is TargetType.INVALID:
        if not quiet:
            warn(f"value cannot be made {kind}:", target)
        return target
    if target_type is TargetType.COLLECTION:
        logger.debug(f"Hash collection passed through unwrapped: {type(target).__name__}")
        return target

    handler = handler_for(variant)
    proxy_class = proxy_class_for(shape_of(target))
    return identity_cache.get_or_create(
        target, variant, lambda: proxy_class(target, handler)
    )


# ============================================================================
# CONSTRUCTORS
# ============================================================================


def reactive(target: T) -> T:
    """
    Return a deep mutable wrapper of ``target``.

    Reads inside an effect are recorded, writes that change something
    re-run the dependent effects, and nested objects are wrapped lazily on
    access. A readonly wrapper is returned as is.
    """
    if is_readonly(target):
        return target
    return _create_reactive_object(target, Variant.MUTABLE_DEEP)


def shallow_reactive(target: T) -> T:
    """Mutable wrapper that tracks only top-level keys and never wraps nested values."""
    return _create_reactive_object(target, Variant.MUTABLE_SHALLOW)


def readonly(target: T) -> T:
    """Deep readonly view: writes warn and are ignored, nested values are readonly too."""
    return _create_reactive_object(target, Variant.READONLY_DEEP)


def shallow_readonly(target: T) -> T:
    return _create_reactive_object(target, Variant.READONLY_SHALLOW)


_CONSTRUCTORS: Dict[Variant, Callable[[Any], Any]] = {
    Variant.MUTABLE_DEEP: reactive,
    Variant.MUTABLE_SHALLOW: shallow_reactive,
    Variant.READONLY_DEEP: readonly,
    Variant.READONLY_SHALLOW: shallow_readonly,
}


def wrap(raw: T, variant: Variant = Variant.MUTABLE_DEEP) -> T:
    """Wrap ``raw`` in the given variant."""
    return _CONSTRUCTORS[variant](raw)


# Lazy wrapping of nested values stays quiet about ineligible ones.


def to_reactive(value: T) -> T:
    if not is_object(value) or is_readonly(value):
        return value
    return _create_reactive_object(value, Variant.MUTABLE_DEEP, quiet=True)


def to_readonly(value: T) -> T:
    if not is_object(value):
        return value
    return _create_reactive_object(value, Variant.READONLY_DEEP, quiet=True)


# ============================================================================
# QUERIES
# ============================================================================

unwrap = to_raw
is_wrapped = is_reactive
mark_raw = mark_skip

__all__ = [
    "is_proxy",
    "is_reactive",
    "is_readonly",
    "is_shallow",
    "is_wrapped",
    "mark_raw",
    "mark_skip",
    "reactive",
    "readonly",
    "shallow_reactive",
    "shallow_readonly",
    "to_raw",
    "to_reactive",
    "to_readonly",
    "unwrap",
    "wrap",
]
