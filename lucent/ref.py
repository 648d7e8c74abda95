"""
Lucent Refs - Single-Slot Reactive Containers
=============================================

A ref holds one value behind a ``value`` property. Reading ``value`` inside
an effect records a dependency on the ref; assigning a different value
re-runs those effects.

Wrapped records unwrap refs transparently: with ``state = reactive({"n":
ref(1)})``, ``state["n"]`` is ``1`` and ``state["n"] = 2`` writes into the
ref. Lists keep the ref itself at each index.

Computed refs derive their value lazily from a getter and cache it until a
dependency changes. A computed without a setter is readonly.

Example:
    ```python
    count = ref(1)
    double = computed(lambda: count.value * 2)

    double.value  # 2
    count.value = 5
    double.value  # 10
    ```
"""

from typing import Any, Callable, Generic, Optional, TypeVar

from .constants import ReactiveFlags, TrackOpType, TriggerOpType
from .effect import ReactiveEffect, track, trigger
from .flags import is_readonly, is_shallow, to_raw
from .util import has_changed
from .warning import warn

T = TypeVar("T")


def is_ref(value: Any) -> bool:
    return getattr(value, ReactiveFlags.IS_REF, False) is True


class Ref(Generic[T]):
    """
    Mutable reactive cell.

    Deep refs store nested objects as reactive wrappers and remember the raw
    value for change detection; shallow refs store the value as given.
    """

    __v_is_ref__ = True

    def __init__(self, value: T, shallow: bool = False) -> None:
        # Import here to avoid circular imports
        from .factory import to_reactive

        self.__v_is_shallow__ = shallow
        self._raw_value = value if shallow else to_raw(value)
        self._value = value if shallow else to_reactive(value)

    @property
    def value(self) -> T:
        track(self, TrackOpType.GET, "value")
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        from .factory import to_reactive

        use_direct = (
            self.__v_is_shallow__ or is_shallow(new_value) or is_readonly(new_value)
        )
        new_raw = new_value if use_direct else to_raw(new_value)
        if has_changed(new_raw, self._raw_value):
            old_value = self._raw_value
            self._raw_value = new_raw
            self._value = new_raw if use_direct else to_reactive(new_raw)
            trigger(self, TriggerOpType.SET, "value", new_raw, old_value)

    def __repr__(self):
        return f"Ref({self._value!r})"


def ref(value: Any = None) -> Ref:
    """Return ``value`` if it already is a ref, else a new deep ref."""
    if is_ref(value):
        return value
    return Ref(value)


def shallow_ref(value: Any = None) -> Ref:
    if is_ref(value):
        return value
    return Ref(value, shallow=True)


def unref(value: Any) -> Any:
    return value.value if is_ref(value) else value


def trigger_ref(cell: Ref) -> None:
    """Force dependents of a ref to re-run, e.g. after mutating a shallow value."""
    trigger(cell, TriggerOpType.SET, "value", cell._value)


class ComputedRef(Generic[T]):
    """
    Lazily evaluated ref derived from a getter.

    The getter runs inside its own effect. When a dependency changes the
    cached value is marked dirty and dependents of the computed re-run; the
    getter itself runs again only on the next read.
    """

    __v_is_ref__ = True

    def __init__(
        self,
        getter: Callable[[], T],
        setter: Optional[Callable[[T], None]] = None,
    ) -> None:
        self._setter = setter
        self._value: Any = None
        self._dirty = True
        self.effect = ReactiveEffect(getter, scheduler=self._schedule)
        self.__v_is_readonly__ = setter is None

    def _schedule(self, _effect: ReactiveEffect) -> None:
        if not self._dirty:
            self._dirty = True
            trigger(self, TriggerOpType.SET, "value")

    @property
    def value(self) -> T:
        track(self, TrackOpType.GET, "value")
        if self._dirty:
            self._value = self.effect.run()
            self._dirty = False
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if self._setter is None:
            warn("Write operation failed: computed value is readonly")
            return
        self._setter(new_value)

    def __repr__(self):
        state = "dirty" if self._dirty else repr(self._value)
        return f"ComputedRef({state})"


def computed(
    getter: Callable[[], T], setter: Optional[Callable[[T], None]] = None
) -> ComputedRef:
    """Create a computed ref; without a setter it is readonly."""
    return ComputedRef(getter, setter)
