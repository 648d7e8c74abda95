"""
Lucent Reflect - Default Property Operations per Target Shape
=============================================================

The handlers intercept reads and writes, then perform the real operation
through this module. Each function dispatches on the target's shape:

- RECORD (``dict``): keys are item keys
- SEQUENCE (``list``): keys are non-negative ``int`` indices; string keys
  name list attributes
- ATTRIBUTES (plain instances): keys are attribute names

Absent keys are reported as ``MISSING`` rather than raised, so the caller
can record the dependency before surfacing the shape's native error.

Attribute reads and writes take a ``receiver``. Python functions, properties
and other pure-Python descriptors found on the class are bound to the
receiver, so methods and property getters run against the wrapper and their
own accesses are intercepted too. Native descriptors (slots, ``object``
methods) are bound to the innermost raw instance because they only accept
real instances.
"""

import types
from typing import Any, Iterable

from .classifier import Shape, shape_of
from .constants import MISSING, ReactiveFlags

_NATIVE_DESCRIPTORS = (
    types.MemberDescriptorType,
    types.GetSetDescriptorType,
    types.WrapperDescriptorType,
    types.MethodDescriptorType,
    types.MethodWrapperType,
    types.ClassMethodDescriptorType,
    types.BuiltinFunctionType,
)


def _innermost(value: Any) -> Any:
    raw = getattr(value, ReactiveFlags.RAW, None)
    while raw is not None:
        value = raw
        raw = getattr(value, ReactiveFlags.RAW, None)
    return value


# ============================================================================
# ATTRIBUTE LOOKUP
# ============================================================================


def class_attribute(cls: type, name: str) -> Any:
    """Find ``name`` along the MRO without invoking descriptors."""
    for klass in cls.__mro__:
        namespace = klass.__dict__
        if name in namespace:
            return namespace[name]
    return MISSING


def _is_data_descriptor(attr: Any) -> bool:
    kind = type(attr)
    return hasattr(kind, "__set__") or hasattr(kind, "__delete__")


def _bind(attr: Any, target: Any, receiver: Any, cls: type) -> Any:
    getter = getattr(type(attr), "__get__", None)
    if getter is None:
        return attr
    instance = _innermost(target) if isinstance(attr, _NATIVE_DESCRIPTORS) else receiver
    return getter(attr, instance, cls)


def _get_attribute(target: Any, name: str, receiver: Any) -> Any:
    cls = target.__class__
    attr = class_attribute(cls, name)
    if attr is not MISSING and _is_data_descriptor(attr):
        return _bind(attr, target, receiver, cls)

    namespace = target.__dict__
    if name in namespace:
        return namespace[name]

    if attr is not MISSING:
        return _bind(attr, target, receiver, cls)

    fallback = class_attribute(cls, "__getattr__")
    if fallback is not MISSING:
        try:
            return _bind(fallback, target, receiver, cls)(name)
        except AttributeError:
            return MISSING
    return MISSING


def _set_attribute(target: Any, name: str, value: Any, receiver: Any) -> bool:
    attr = class_attribute(target.__class__, name)
    if attr is not MISSING:
        setter = getattr(type(attr), "__set__", None)
        if setter is not None:
            instance = (
                _innermost(target) if isinstance(attr, _NATIVE_DESCRIPTORS) else receiver
            )
            setter(attr, instance, value)
            return True
    setattr(target, name, value)
    return True


# ============================================================================
# OPERATIONS
# ============================================================================


def get_key(target: Any, key: Any, receiver: Any) -> Any:
    """Read ``key``; ``MISSING`` when absent."""
    shape = shape_of(target)
    if shape is Shape.RECORD:
        try:
            return target[key]
        except KeyError:
            return MISSING
    if shape is Shape.SEQUENCE:
        if isinstance(key, str):
            return getattr(target, key, MISSING)
        if 0 <= key < len(target):
            return target[key]
        return MISSING
    return _get_attribute(target, key, receiver)


def peek_key(target: Any, key: Any) -> Any:
    """Read ``key`` without triggering defaults such as ``__missing__``."""
    shape = shape_of(target)
    if shape is Shape.RECORD:
        return target[key] if key in target else MISSING
    if shape is Shape.SEQUENCE:
        return get_key(target, key, target)
    return _get_attribute(target, key, target)


def set_key(target: Any, key: Any, value: Any, receiver: Any) -> bool:
    """Write ``key``; native errors (e.g. ``IndexError``) propagate."""
    if shape_of(target) is Shape.ATTRIBUTES:
        return _set_attribute(target, key, value, receiver)
    target[key] = value
    return True


def delete_key(target: Any, key: Any) -> bool:
    """Delete ``key``; raises the native error when it is absent."""
    if shape_of(target) is Shape.ATTRIBUTES:
        delattr(target, key)
    else:
        del target[key]
    return True


def has_key(target: Any, key: Any) -> bool:
    """Existence including class-level attributes."""
    shape = shape_of(target)
    if shape is Shape.ATTRIBUTES:
        return key in target.__dict__ or class_attribute(target.__class__, key) is not MISSING
    return has_own_key(target, key)


def has_own_key(target: Any, key: Any) -> bool:
    """Existence of the key on the value itself."""
    shape = shape_of(target)
    if shape is Shape.RECORD:
        return key in target
    if shape is Shape.SEQUENCE:
        return isinstance(key, int) and 0 <= key < len(target)
    return key in target.__dict__


def own_keys(target: Any) -> Iterable[Any]:
    shape = shape_of(target)
    if shape is Shape.SEQUENCE:
        return range(len(target))
    if shape is Shape.RECORD:
        return list(target)
    return list(target.__dict__)
