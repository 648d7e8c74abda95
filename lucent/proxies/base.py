"""
Common base of the wrapper types.

A wrapper stores exactly two things, its target and its handler, in slots
that are read through ``object.__getattribute__`` so that attribute
interception in subclasses never sees them.
"""

import copy
from typing import Any

from ..constants import FLAG_KEYS


def target_of(proxy: "ReactiveProxy") -> Any:
    return object.__getattribute__(proxy, "_target")


def handler_of(proxy: "ReactiveProxy") -> Any:
    return object.__getattribute__(proxy, "_handler")


class ReactiveProxy:
    """
    Base wrapper: reports the target's class and answers the flag attributes.

    ``isinstance(wrapper, type(raw))`` holds because ``__class__`` is the
    raw class.
    """

    __slots__ = ("_target", "_handler", "__weakref__")

    def __init__(self, target: Any, handler: Any) -> None:
        object.__setattr__(self, "_target", target)
        object.__setattr__(self, "_handler", handler)

    @property
    def __class__(self):
        return target_of(self).__class__

    def __getattr__(self, name: str) -> Any:
        if name in FLAG_KEYS:
            return handler_of(self).get(target_of(self), name, self)
        raise AttributeError(
            f"'{target_of(self).__class__.__name__}' object has no attribute '{name}'"
        )

    def __deepcopy__(self, memo: dict) -> Any:
        return copy.deepcopy(target_of(self), memo)

    def __reduce_ex__(self, protocol: int) -> Any:
        return target_of(self).__reduce_ex__(protocol)

    def __repr__(self):
        return f"{handler_of(self).variant.label}({target_of(self)!r})"
