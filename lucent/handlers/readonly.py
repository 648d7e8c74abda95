"""
Readonly write strategy: rejects writes with a development warning.
"""

from typing import Any, Iterable

from .. import reflect
from ..constants import Variant
from ..warning import warn


class ReadonlyWriteStrategy:
    """
    Write path for ``readonly`` and ``shallow_readonly`` wrappers.

    Writes and deletes never touch the target. They report success so that
    callers relying on a truthy result keep going; the only trace is the
    warning. Membership and key listing are answered but not recorded.
    """

    def set(self, variant: Variant, target: Any, key: Any, value: Any, receiver: Any) -> bool:
        warn(f'Set operation on key "{key}" failed: target is readonly.', target)
        return True

    def delete_property(self, variant: Variant, target: Any, key: Any) -> bool:
        warn(f'Delete operation on key "{key}" failed: target is readonly.', target)
        return True

    def has(self, variant: Variant, target: Any, key: Any) -> bool:
        return reflect.has_key(target, key)

    def own_keys(self, variant: Variant, target: Any) -> Iterable[Any]:
        return reflect.own_keys(target)
