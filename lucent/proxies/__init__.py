"""
Lucent Proxies - Wrapper Types per Target Shape
===============================================

- ``DictProxy``: ``dict`` targets, a ``MutableMapping``
- ``ListProxy``: ``list`` targets, with instrumented list methods
- ``ObjectProxy``: ordinary class instances, intercepting attribute access

All three report the raw class through ``__class__`` and forward every
operation to the handler of their variant.
"""

from typing import Dict, Type

from ..classifier import Shape
from .attributes import ObjectProxy
from .base import ReactiveProxy, handler_of, target_of
from .record import DictProxy
from .sequence import ListProxy

_PROXY_TYPES: Dict[Shape, Type[ReactiveProxy]] = {
    Shape.RECORD: DictProxy,
    Shape.SEQUENCE: ListProxy,
    Shape.ATTRIBUTES: ObjectProxy,
}


def proxy_class_for(shape: Shape) -> Type[ReactiveProxy]:
    return _PROXY_TYPES[shape]


__all__ = [
    "DictProxy",
    "ListProxy",
    "ObjectProxy",
    "ReactiveProxy",
    "handler_of",
    "proxy_class_for",
    "target_of",
]
