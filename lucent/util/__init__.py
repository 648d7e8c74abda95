"""
Lucent Utils - Value Inspection Helpers
=======================================

Helpers shared by the classifier, the handlers and the dependency engine.
"""

from .shared import (
    BUILTIN_DUNDERS,
    NON_TRACKABLE_KEYS,
    PRIMITIVE_TYPES,
    has_changed,
    is_builtin_key,
    is_integer_key,
    is_object,
    is_untracked_key,
)

__all__ = [
    "BUILTIN_DUNDERS",
    "NON_TRACKABLE_KEYS",
    "PRIMITIVE_TYPES",
    "has_changed",
    "is_builtin_key",
    "is_integer_key",
    "is_object",
    "is_untracked_key",
]
