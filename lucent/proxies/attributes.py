"""
Wrapper for instances of ordinary classes.

Every attribute read, write and delete is routed to the handler. Methods and
properties found on the class are bound to the wrapper, so a method that
mutates ``self`` mutates through interception and notifies.

Python looks special methods up on the type, not the instance, so the data
model hooks a plain record needs (``repr``, ``str``, ``==``, ``hash``,
``bool``, ``dir`` and ``format``) are forwarded explicitly: a user-defined
version runs with the wrapper as ``self``; the default behaves as it would
on the raw instance.
"""

import copy
from typing import Any, List

from ..constants import MISSING
from ..flags import to_raw
from ..reflect import class_attribute
from .base import ReactiveProxy, handler_of, target_of


def _special_method(proxy: "ObjectProxy", name: str) -> Any:
    return class_attribute(target_of(proxy).__class__, name)


class ObjectProxy(ReactiveProxy):
    __slots__ = ()

    def __getattribute__(self, name: str) -> Any:
        target = target_of(self)
        if name == "__class__":
            return target.__class__
        value = handler_of(self).get(target, name, self)
        if value is MISSING:
            raise AttributeError(
                f"'{target.__class__.__name__}' object has no attribute '{name}'"
            )
        return value

    def __setattr__(self, name: str, value: Any) -> None:
        handler_of(self).set(target_of(self), name, value, self)

    def __delattr__(self, name: str) -> None:
        handler_of(self).delete_property(target_of(self), name)

    def __dir__(self) -> List[str]:
        handler_of(self).own_keys(target_of(self))
        return dir(target_of(self))

    def __repr__(self):
        method = _special_method(self, "__repr__")
        if method is object.__repr__:
            return ReactiveProxy.__repr__(self)
        return method(self)

    def __str__(self):
        method = _special_method(self, "__str__")
        if method is object.__str__:
            return repr(self)
        return method(self)

    def __format__(self, format_spec: str) -> str:
        method = _special_method(self, "__format__")
        if method is object.__format__:
            return format(str(self), format_spec)
        return method(self, format_spec)

    def __eq__(self, other: Any) -> Any:
        method = _special_method(self, "__eq__")
        if method is object.__eq__:
            return to_raw(self) is to_raw(other)
        return method(self, other)

    def __ne__(self, other: Any) -> Any:
        result = ObjectProxy.__eq__(self, other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        method = _special_method(self, "__hash__")
        if method is None:
            raise TypeError(f"unhashable type: '{target_of(self).__class__.__name__}'")
        return hash(target_of(self))

    def __bool__(self) -> bool:
        return bool(target_of(self))

    def __copy__(self) -> Any:
        return copy.copy(target_of(self))
