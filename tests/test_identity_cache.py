"""Tests for the per-variant identity cache."""

import gc
import threading
import weakref

import pytest

from lucent import Variant, reactive, readonly, shallow_reactive, shallow_readonly
from lucent.identity_cache import IdentityCache, identity_cache


class Box:
    pass


@pytest.mark.unit
class TestIdentityCache:
    """One live wrapper per raw value and variant."""

    def test_same_wrapper_for_same_raw_and_variant(self):
        """Wrapping the same value twice yields the identical wrapper."""
        raw = {"a": 1}
        assert reactive(raw) is reactive(raw)
        assert readonly(raw) is readonly(raw)

    def test_variants_have_independent_wrappers(self):
        """Each variant holds its own wrapper of the same raw value."""
        raw = {"a": 1}
        wrappers = [
            reactive(raw),
            shallow_reactive(raw),
            readonly(raw),
            shallow_readonly(raw),
        ]
        assert len({id(wrapper) for wrapper in wrappers}) == 4

    def test_registered_wrapper_can_be_looked_up(self):
        cache = IdentityCache()
        raw = {}
        wrapper = Box()
        cache.register(raw, Variant.MUTABLE_DEEP, wrapper)

        assert cache.lookup(raw, Variant.MUTABLE_DEEP) is wrapper
        assert cache.lookup(raw, Variant.READONLY_DEEP) is None
        assert cache.size(Variant.MUTABLE_DEEP) == 1

    def test_entry_disappears_when_wrapper_is_collected(self):
        """The raw value never keeps its wrapper alive."""
        cache = IdentityCache()
        raw = []
        wrapper = Box()
        cache.register(raw, Variant.MUTABLE_DEEP, wrapper)

        del wrapper
        gc.collect()

        assert cache.lookup(raw, Variant.MUTABLE_DEEP) is None
        assert cache.size(Variant.MUTABLE_DEEP) == 0

    def test_global_cache_releases_collected_wrappers(self):
        """Dropping the last reference to a wrapper frees it."""
        raw = {"a": 1}
        wrapper = reactive(raw)
        wrapper_ref = weakref.ref(wrapper)

        del wrapper
        gc.collect()

        assert wrapper_ref() is None
        assert identity_cache.lookup(raw, Variant.MUTABLE_DEEP) is None

    def test_get_or_create_builds_once(self):
        """The factory callable runs only when no live wrapper exists."""
        cache = IdentityCache()
        raw = {}
        built = []

        def make():
            built.append(Box())
            return built[-1]

        first = cache.get_or_create(raw, Variant.READONLY_SHALLOW, make)
        second = cache.get_or_create(raw, Variant.READONLY_SHALLOW, make)

        assert first is second
        assert len(built) == 1

    def test_clear_forgets_every_variant(self):
        cache = IdentityCache()
        raw = {}
        keep = [Box() for _ in Variant]
        for variant, wrapper in zip(Variant, keep):
            cache.register(raw, variant, wrapper)

        cache.clear()

        assert all(cache.lookup(raw, variant) is None for variant in Variant)

    def test_concurrent_wrapping_returns_a_single_wrapper(self):
        """Threads racing to wrap the same value agree on one wrapper."""
        raw = {"shared": True}
        barrier = threading.Barrier(8)
        results = []
        lock = threading.Lock()

        def worker():
            barrier.wait()
            wrapper = reactive(raw)
            with lock:
                results.append(wrapper)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(wrapper is results[0] for wrapper in results)
