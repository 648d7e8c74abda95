"""
Flag queries answered by wrappers.

Every wrapper answers the ``ReactiveFlags`` attributes virtually, so these
helpers work on wrappers, refs and plain values alike: a plain value simply
has none of the flags.
"""

from typing import Any, TypeVar

from .constants import ReactiveFlags

T = TypeVar("T")


def is_readonly(value: Any) -> bool:
    """True for readonly wrappers and readonly refs."""
    return bool(getattr(value, ReactiveFlags.IS_READONLY, False))


def is_shallow(value: Any) -> bool:
    return bool(getattr(value, ReactiveFlags.IS_SHALLOW, False))


def is_reactive(value: Any) -> bool:
    """
    True for mutable wrappers, and for readonly wrappers layered over one.

    ``is_reactive(readonly(reactive(x)))`` is True; ``is_reactive(readonly(x))``
    is False.
    """
    if is_readonly(value):
        return is_reactive(getattr(value, ReactiveFlags.RAW, None))
    return bool(getattr(value, ReactiveFlags.IS_REACTIVE, False))


def is_proxy(value: Any) -> bool:
    """True for any wrapper produced by the factory, whatever its variant."""
    return getattr(value, ReactiveFlags.RAW, None) is not None


def to_raw(observed: T) -> T:
    """
    Peel wrappers until reaching the underlying raw value.

    Idempotent: raw values come back unchanged.
    """
    raw = getattr(observed, ReactiveFlags.RAW, None)
    while raw is not None:
        observed = raw
        raw = getattr(observed, ReactiveFlags.RAW, None)
    return observed
