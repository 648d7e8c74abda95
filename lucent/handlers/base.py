"""
Lucent Handlers - Variant Composition
=====================================

A ``ProxyHandler`` is the bundle of five hooks a wrapper forwards every
operation to:

- ``get(target, key, receiver)``
- ``set(target, key, value, receiver)``
- ``delete_property(target, key)``
- ``has(target, key)``
- ``own_keys(target)``

Each handler composes the shared read strategy with one write strategy and
is tagged by its ``Variant``. There are exactly four handlers, one per
variant, shared by every wrapper of that variant.
"""

from typing import Any, Dict, Iterable

from ..constants import Variant
from .mutable import MutableWriteStrategy
from .read import ReadStrategy, read_strategy
from .readonly import ReadonlyWriteStrategy


class ProxyHandler:
    """Hooks of one variant, forwarding to its read and write strategies."""

    __slots__ = ("variant", "reader", "writer")

    def __init__(self, variant: Variant, reader: ReadStrategy, writer: Any) -> None:
        self.variant = variant
        self.reader = reader
        self.writer = writer

    def get(self, target: Any, key: Any, receiver: Any) -> Any:
        return self.reader.get(self.variant, target, key, receiver, self)

    def has_own(self, target: Any, key: Any) -> bool:
        return self.reader.has_own(self.variant, target, key)

    def set(self, target: Any, key: Any, value: Any, receiver: Any) -> bool:
        return self.writer.set(self.variant, target, key, value, receiver)

    def delete_property(self, target: Any, key: Any) -> bool:
        return self.writer.delete_property(self.variant, target, key)

    def has(self, target: Any, key: Any) -> bool:
        return self.writer.has(self.variant, target, key)

    def own_keys(self, target: Any) -> Iterable[Any]:
        return self.writer.own_keys(self.variant, target)

    def __repr__(self):
        return f"ProxyHandler({self.variant.label})"


mutable_strategy = MutableWriteStrategy()
readonly_strategy = ReadonlyWriteStrategy()

mutable_handlers = ProxyHandler(Variant.MUTABLE_DEEP, read_strategy, mutable_strategy)
shallow_reactive_handlers = ProxyHandler(
    Variant.MUTABLE_SHALLOW, read_strategy, mutable_strategy
)
readonly_handlers = ProxyHandler(Variant.READONLY_DEEP, read_strategy, readonly_strategy)
shallow_readonly_handlers = ProxyHandler(
    Variant.READONLY_SHALLOW, read_strategy, readonly_strategy
)

_HANDLERS: Dict[Variant, ProxyHandler] = {
    handler.variant: handler
    for handler in (
        mutable_handlers,
        shallow_reactive_handlers,
        readonly_handlers,
        shallow_readonly_handlers,
    )
}


def handler_for(variant: Variant) -> ProxyHandler:
    return _HANDLERS[variant]
