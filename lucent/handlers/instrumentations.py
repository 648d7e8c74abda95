"""
Lucent Sequence Instrumentation - Tracked List Methods
======================================================

Python lists cannot grow through index assignment, so structural changes
(``append``, ``insert``, ``pop``, slice assignment, ``del``...) are routed
through instrumented versions of the list methods instead of the per-key
set hook.

Mutators:
    Arguments are normalized to raw values, the method runs on the raw list
    with tracking paused, and notifications are derived by comparing the
    list before and after: SET for every index whose value changed, ADD for
    every new index, and a ``length`` SET when the list shrank.

Searchers:
    ``index``, ``count`` and ``in`` depend on every element and on the
    length. They search the raw list, retrying with the raw form of the
    argument when a wrapped value was passed in and not found.

Every instrumented function takes ``(target, receiver, *args)`` and is bound
to both by the read strategy.
"""

from typing import Any, Callable, Dict, List, Optional, Tuple

from ..constants import LENGTH_KEY, TrackOpType, TriggerOpType
from ..effect import pause_tracking, reset_tracking, track, trigger
from ..flags import is_readonly, is_shallow, to_raw
from ..ref import is_ref
from ..util import has_changed
from ..warning import warn

Args = Tuple[Any, ...]


def _raw_item(value: Any, shallow: bool) -> Any:
    if shallow or is_shallow(value) or is_readonly(value):
        return value
    return to_raw(value)


def _wrap_item(value: Any, receiver: Any) -> Any:
    if is_shallow(receiver) or is_ref(value):
        return value
    # Import here to avoid circular imports
    from ..factory import to_reactive

    return to_reactive(value)


def _notify_changes(target: List[Any], snapshot: List[Any]) -> None:
    current = list(target)
    old_length = len(snapshot)
    new_length = len(current)

    for index in range(min(old_length, new_length)):
        if has_changed(current[index], snapshot[index]):
            trigger(target, TriggerOpType.SET, index, current[index], snapshot[index])
    for index in range(old_length, new_length):
        trigger(target, TriggerOpType.ADD, index, current[index])
    if new_length < old_length:
        trigger(target, TriggerOpType.SET, LENGTH_KEY, new_length, old_length)


# ============================================================================
# MUTATORS
# ============================================================================


def _prepare_item(receiver: Any, args: Args) -> Args:
    (value,) = args
    return (_raw_item(value, is_shallow(receiver)),)


def _prepare_insert(receiver: Any, args: Args) -> Args:
    index, value = args
    return (index, _raw_item(value, is_shallow(receiver)))


def _prepare_items(receiver: Any, args: Args) -> Args:
    (values,) = args
    shallow = is_shallow(receiver)
    return ([_raw_item(value, shallow) for value in values],)


def _prepare_slice(receiver: Any, args: Args) -> Args:
    index, values = args
    if not isinstance(index, slice):
        return (index, _raw_item(values, is_shallow(receiver)))
    return (index,) + _prepare_items(receiver, (values,))


def _prepare_search(receiver: Any, args: Args) -> Args:
    (value,) = args
    return (to_raw(value),)


def _mutator(
    name: str,
    prepare: Optional[Callable[[Any, Args], Args]] = None,
    wrap_result: bool = False,
) -> Callable[..., Any]:
    def method(target: List[Any], receiver: Any, *args: Any, **kwargs: Any) -> Any:
        if prepare is not None:
            args = prepare(receiver, args)
        snapshot = list(target)
        pause_tracking()
        try:
            result = getattr(target, name)(*args, **kwargs)
        finally:
            reset_tracking()
            _notify_changes(target, snapshot)
        return _wrap_item(result, receiver) if wrap_result else result

    method.__name__ = name
    return method


def _sort(target: List[Any], receiver: Any, *, key=None, reverse=False) -> None:
    if key is not None and not is_shallow(receiver):
        user_key = key

        def key(item: Any) -> Any:
            return user_key(_wrap_item(item, receiver))

    snapshot = list(target)
    pause_tracking()
    try:
        target.sort(key=key, reverse=reverse)
    finally:
        reset_tracking()
        _notify_changes(target, snapshot)


# ============================================================================
# SEARCHERS
# ============================================================================


def _track_elements(target: List[Any]) -> None:
    track(target, TrackOpType.ITERATE, LENGTH_KEY)
    for index in range(len(target)):
        track(target, TrackOpType.GET, index)


def _index(target: List[Any], value: Any, *args: Any) -> int:
    try:
        return target.index(value, *args)
    except ValueError:
        raw = to_raw(value)
        if raw is value:
            raise
        return target.index(raw, *args)


def _count(target: List[Any], value: Any) -> int:
    found = target.count(value)
    raw = to_raw(value)
    if not found and raw is not value:
        found = target.count(raw)
    return found


def _contains(target: List[Any], value: Any) -> bool:
    if value in target:
        return True
    raw = to_raw(value)
    return raw is not value and raw in target


def _tracked_search(search: Callable[..., Any]) -> Callable[..., Any]:
    def method(target: List[Any], receiver: Any, *args: Any) -> Any:
        _track_elements(target)
        return search(target, *args)

    method.__name__ = search.__name__.lstrip("_")
    return method


def _untracked_search(search: Callable[..., Any]) -> Callable[..., Any]:
    def method(target: Any, receiver: Any, *args: Any) -> Any:
        return search(target, *args)

    method.__name__ = search.__name__.lstrip("_")
    return method


def _copy(target: Any, receiver: Any) -> List[Any]:
    return list(receiver)


# ============================================================================
# READONLY
# ============================================================================


def _rejected(name: str) -> Callable[..., None]:
    def method(target: Any, receiver: Any, *args: Any, **kwargs: Any) -> None:
        warn(f'Mutation "{name}" failed: target is readonly.', target)

    method.__name__ = name
    return method


# ============================================================================
# TABLES
# ============================================================================

MUTATOR_NAMES = (
    "append",
    "extend",
    "insert",
    "pop",
    "remove",
    "clear",
    "reverse",
    "sort",
    "__setitem__",
    "__delitem__",
    "__iadd__",
    "__imul__",
)

MUTABLE_SEQUENCE_METHODS: Dict[str, Callable[..., Any]] = {
    "append": _mutator("append", _prepare_item),
    "extend": _mutator("extend", _prepare_items),
    "__iadd__": _mutator("__iadd__", _prepare_items),
    "insert": _mutator("insert", _prepare_insert),
    "pop": _mutator("pop", wrap_result=True),
    "remove": _mutator("remove", _prepare_search),
    "clear": _mutator("clear"),
    "reverse": _mutator("reverse"),
    "sort": _sort,
    "__setitem__": _mutator("__setitem__", _prepare_slice),
    "__delitem__": _mutator("__delitem__"),
    "__imul__": _mutator("__imul__"),
    "index": _tracked_search(_index),
    "count": _tracked_search(_count),
    "__contains__": _tracked_search(_contains),
    "copy": _copy,
}

READONLY_SEQUENCE_METHODS: Dict[str, Callable[..., Any]] = {
    **{name: _rejected(name) for name in MUTATOR_NAMES},
    "index": _untracked_search(_index),
    "count": _untracked_search(_count),
    "__contains__": _untracked_search(_contains),
    "copy": _copy,
}
