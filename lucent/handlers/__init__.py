"""
Lucent Handlers
===============

Interception hooks shared by every wrapper, one ``ProxyHandler`` per variant.
"""

from .base import (
    ProxyHandler,
    handler_for,
    mutable_handlers,
    readonly_handlers,
    shallow_reactive_handlers,
    shallow_readonly_handlers,
)
from .mutable import MutableWriteStrategy
from .read import OwnAttributes, ReadStrategy
from .readonly import ReadonlyWriteStrategy

__all__ = [
    "MutableWriteStrategy",
    "OwnAttributes",
    "ProxyHandler",
    "ReadStrategy",
    "ReadonlyWriteStrategy",
    "handler_for",
    "mutable_handlers",
    "readonly_handlers",
    "shallow_reactive_handlers",
    "shallow_readonly_handlers",
]
