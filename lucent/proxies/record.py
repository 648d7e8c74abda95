"""
Wrapper for ``dict`` targets.

``DictProxy`` is a ``MutableMapping`` built on the five hooks, so the
mapping mixins (``get``, ``pop``, ``setdefault``, ``update``, ``keys``,
``items``, ``==``...) all go through interception.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, Iterator, Tuple

from ..constants import MISSING
from .base import ReactiveProxy, handler_of, target_of


class DictProxy(ReactiveProxy, MutableMapping):
    __slots__ = ()

    def __getitem__(self, key: Any) -> Any:
        value = handler_of(self).get(target_of(self), key, self)
        if value is MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        handler_of(self).set(target_of(self), key, value, self)

    def __delitem__(self, key: Any) -> None:
        handler_of(self).delete_property(target_of(self), key)

    def __contains__(self, key: object) -> bool:
        return handler_of(self).has(target_of(self), key)

    def __iter__(self) -> Iterator[Any]:
        return iter(handler_of(self).own_keys(target_of(self)))

    def __reversed__(self) -> Iterator[Any]:
        return reversed(list(handler_of(self).own_keys(target_of(self))))

    def __len__(self) -> int:
        return len(handler_of(self).own_keys(target_of(self)))

    # get, pop and setdefault test membership first so that a ``__missing__``
    # hook on the target only runs for plain subscription, as with ``dict``.

    def get(self, key: Any, default: Any = None) -> Any:
        if key in self:
            return self[key]
        return default

    def pop(self, key: Any, *default: Any) -> Any:
        if key not in self:
            if default:
                return default[0]
            raise KeyError(key)
        value = self[key]
        del self[key]
        return value

    def setdefault(self, key: Any, default: Any = None) -> Any:
        if key not in self:
            self[key] = default
        return self[key]

    def popitem(self) -> Tuple[Any, Any]:
        """Remove and return the most recently inserted pair, as ``dict`` does."""
        keys = list(self)
        if not keys:
            raise KeyError("popitem(): dictionary is empty")
        key = keys[-1]
        value = self[key]
        del self[key]
        return key, value

    def clear(self) -> None:
        for key in list(self):
            del self[key]

    def copy(self) -> Dict[Any, Any]:
        return dict(self.items())

    __copy__ = copy

    def __or__(self, other: Any) -> Any:
        if not isinstance(other, Mapping):
            return NotImplemented
        merged = self.copy()
        merged.update(other)
        return merged

    def __ror__(self, other: Any) -> Any:
        if not isinstance(other, Mapping):
            return NotImplemented
        merged = dict(other)
        merged.update(self.items())
        return merged

    def __ior__(self, other: Any) -> "DictProxy":
        self.update(other)
        return self

    __hash__ = None
