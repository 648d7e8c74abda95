"""
Lucent Identity Cache - One Wrapper per Raw Value and Variant
=============================================================

Four independent tables, one per variant, map a raw value's identity to the
wrapper currently standing in for it. The same raw value can therefore have
up to four live wrappers at once, one per variant, but never two for the
same variant.

Weak keying:
    ``dict`` and ``list`` support neither hashing by identity nor weak
    references, so the tables are keyed by ``id(raw)`` and hold the wrapper
    through a ``weakref.ref``. A wrapper keeps its raw value alive, which
    pins the id for as long as the entry can be used; when the wrapper is
    collected a weakref callback removes the entry. The raw value never keeps
    its wrapper alive.

Thread Safety:
    ``get_or_create`` performs lookup and registration under one lock so
    concurrent callers cannot allocate two wrappers for the same pair.
"""

import threading
import weakref
from typing import Any, Callable, Dict, Optional

from .constants import Variant


class IdentityCache:
    """Per-variant weak mapping from raw value to wrapper."""

    def __init__(self):
        self._tables: Dict[Variant, Dict[int, weakref.ref]] = {
            variant: {} for variant in Variant
        }
        self._lock = threading.RLock()

    def lookup(self, raw: Any, variant: Variant) -> Optional[Any]:
        """Return the live wrapper for ``(raw, variant)``, if any."""
        ref = self._tables[variant].get(id(raw))
        if ref is None:
            return None
        return ref()

    def register(self, raw: Any, variant: Variant, wrapper: Any) -> None:
        """Record ``wrapper`` as the canonical wrapper of ``(raw, variant)``."""
        table = self._tables[variant]
        key = id(raw)

        def _remove(ref: weakref.ref, key: int = key) -> None:
            with self._lock:
                if table.get(key) is ref:
                    del table[key]

        with self._lock:
            table[key] = weakref.ref(wrapper, _remove)

    def get_or_create(
        self, raw: Any, variant: Variant, factory: Callable[[], Any]
    ) -> Any:
        """Atomically return the existing wrapper or build and register one."""
        with self._lock:
            existing = self.lookup(raw, variant)
            if existing is not None:
                return existing
            wrapper = factory()
            self.register(raw, variant, wrapper)
            return wrapper

    def size(self, variant: Variant) -> int:
        """Number of live wrappers held for ``variant``."""
        return sum(1 for ref in list(self._tables[variant].values()) if ref() is not None)

    def clear(self) -> None:
        with self._lock:
            for table in self._tables.values():
                table.clear()


identity_cache = IdentityCache()
