"""
Mutable write strategy: performs writes and announces the ones that matter.
"""

import logging
from typing import Any, Iterable

from .. import reflect
from ..classifier import is_sequence
from ..constants import ITERATE_KEY, LENGTH_KEY, TrackOpType, TriggerOpType, Variant
from ..effect import track, trigger
from ..flags import is_readonly, is_shallow, to_raw
from ..ref import is_ref
from ..util import has_changed, is_integer_key, is_untracked_key

logger = logging.getLogger("lucent")


class MutableWriteStrategy:
    """
    Write path for ``reactive`` and ``shallow_reactive`` wrappers.

    A write notifies only when it adds a key or changes a value, and only
    when the wrapper performing it is the one standing for the target, so a
    write reaching the target through an inherited lookup on another object
    stays silent.
    """

    def set(self, variant: Variant, target: Any, key: Any, value: Any, receiver: Any) -> bool:
        if is_sequence(target) and is_integer_key(key):
            had_key = key < len(target)
        else:
            had_key = reflect.has_own_key(target, key)
        old_value = reflect.peek_key(target, key)

        if not variant.shallow:
            is_old_readonly = is_readonly(old_value)
            if not is_shallow(value) and not is_readonly(value):
                old_value = to_raw(old_value)
                value = to_raw(value)
            if not is_sequence(target) and is_ref(old_value) and not is_ref(value):
                if is_old_readonly:
                    logger.debug(f"Refused write of {key!r}: the stored ref is readonly")
                    return True
                old_value.value = value
                return True

        result = reflect.set_key(target, key, value, target if is_ref(target) else receiver)

        if target is to_raw(receiver):
            if not had_key:
                trigger(target, TriggerOpType.ADD, key, value)
            elif has_changed(value, old_value):
                trigger(target, TriggerOpType.SET, key, value, old_value)
        return result

    def delete_property(self, variant: Variant, target: Any, key: Any) -> bool:
        had_key = reflect.has_own_key(target, key)
        old_value = reflect.peek_key(target, key)
        result = reflect.delete_key(target, key)
        if result and had_key:
            trigger(target, TriggerOpType.DELETE, key, None, old_value)
        return result

    def has(self, variant: Variant, target: Any, key: Any) -> bool:
        result = reflect.has_key(target, key)
        if not is_untracked_key(key):
            track(target, TrackOpType.HAS, key)
        return result

    def own_keys(self, variant: Variant, target: Any) -> Iterable[Any]:
        track(
            target,
            TrackOpType.ITERATE,
            LENGTH_KEY if is_sequence(target) else ITERATE_KEY,
        )
        return reflect.own_keys(target)
