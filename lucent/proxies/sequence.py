"""
Wrapper for ``list`` targets.

Index reads and writes go through the get and set hooks; structural
changes and searches resolve to the instrumented list methods through the
get hook, so readonly wrappers reject them and mutable ones announce them.
"""

import operator
from typing import Any, Callable, Iterator, List

from ..constants import MISSING
from .base import ReactiveProxy, handler_of, target_of


class ListProxy(ReactiveProxy):
    __slots__ = ()

    __hash__ = None

    def _method(self, name: str) -> Callable[..., Any]:
        return handler_of(self).get(target_of(self), name, self)

    def _position(self, index: Any) -> int:
        index = operator.index(index)
        if index < 0:
            index += len(self)
        return index

    # Item access

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, slice):
            return [self[position] for position in range(*index.indices(len(self)))]
        value = handler_of(self).get(target_of(self), self._position(index), self)
        if value is MISSING:
            raise IndexError("list index out of range")
        return value

    def __setitem__(self, index: Any, value: Any) -> None:
        if isinstance(index, slice):
            self._method("__setitem__")(index, value)
            return
        position = self._position(index)
        if not 0 <= position < len(target_of(self)):
            raise IndexError("list assignment index out of range")
        handler_of(self).set(target_of(self), position, value, self)

    def __delitem__(self, index: Any) -> None:
        self._method("__delitem__")(index)

    def __iter__(self) -> Iterator[Any]:
        handler = handler_of(self)
        target = target_of(self)
        for position in handler.own_keys(target):
            value = handler.get(target, position, self)
            if value is MISSING:
                return
            yield value

    def __reversed__(self) -> Iterator[Any]:
        handler = handler_of(self)
        target = target_of(self)
        for position in reversed(handler.own_keys(target)):
            yield handler.get(target, position, self)

    def __len__(self) -> int:
        return len(handler_of(self).own_keys(target_of(self)))

    def __contains__(self, value: Any) -> bool:
        return self._method("__contains__")(value)

    # Comparison and arithmetic produce plain lists

    def __eq__(self, other: Any) -> Any:
        if not isinstance(other, list):
            return NotImplemented
        return list(self) == list(other)

    def __add__(self, other: Any) -> Any:
        if not isinstance(other, list):
            return NotImplemented
        return list(self) + list(other)

    def __radd__(self, other: Any) -> Any:
        if not isinstance(other, list):
            return NotImplemented
        return list(other) + list(self)

    def __mul__(self, count: int) -> List[Any]:
        return list(self) * count

    __rmul__ = __mul__

    def __iadd__(self, other: Any) -> "ListProxy":
        self._method("extend")(other)
        return self

    def __imul__(self, count: int) -> "ListProxy":
        self._method("__imul__")(count)
        return self

    # List methods

    def append(self, value: Any) -> None:
        self._method("append")(value)

    def extend(self, values: Any) -> None:
        self._method("extend")(values)

    def insert(self, index: int, value: Any) -> None:
        self._method("insert")(index, value)

    def pop(self, index: int = -1) -> Any:
        return self._method("pop")(index)

    def remove(self, value: Any) -> None:
        self._method("remove")(value)

    def clear(self) -> None:
        self._method("clear")()

    def reverse(self) -> None:
        self._method("reverse")()

    def sort(self, *, key: Any = None, reverse: bool = False) -> None:
        self._method("sort")(key=key, reverse=reverse)

    def index(self, value: Any, *args: Any) -> int:
        return self._method("index")(value, *args)

    def count(self, value: Any) -> int:
        return self._method("count")(value)

    def copy(self) -> List[Any]:
        return self._method("copy")()

    __copy__ = copy
