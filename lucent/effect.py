"""
Lucent Effects - Minimal Dependency Tracking Engine
===================================================

The interception layer reports reads through ``track`` and writes through
``trigger``. This module stores those subscriptions and re-runs the effects
that depend on a changed ``(target, key)`` pair.

Key Features:
- Automatic dependency collection while an effect runs
- Dependencies are cleaned up before every re-run
- Nested effects restore the outer effect when they finish
- Tracking can be paused, e.g. while list instrumentation probes indices
- Optional scheduler and debugger hooks per effect

Fan-out rules for ``trigger``:
- CLEAR reaches every dependent of the target
- a ``length`` change on a list reaches ``length`` and every index at or
  beyond the new length
- otherwise the key's dependents; ADD additionally reaches ``ITERATE_KEY``
  (records) or ``length`` (lists) and DELETE reaches ``ITERATE_KEY``

Thread Safety:
    The active effect and the tracking stack are thread-local, so each thread
    collects its own dependencies.

Example:
    ```python
    state = reactive({"count": 0})
    seen = []

    effect(lambda: seen.append(state["count"]))
    state["count"] = 1  # seen == [0, 1]
    ```
"""

import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from .constants import ITERATE_KEY, LENGTH_KEY, TrackOpType, TriggerOpType
from .util import is_integer_key

# ============================================================================
# DEBUGGER EVENTS
# ============================================================================


@dataclass
class DebuggerEvent:
    """
    Describes one recorded read or one announced write.

    Attributes:
        effect: The effect being tracked or triggered
        target: The raw value involved
        type: A TrackOpType or TriggerOpType
        key: The key read or written
        new_value: Value after the write (trigger only)
        old_value: Value before the write (trigger only)
    """

    effect: "ReactiveEffect"
    target: Any
    type: Any
    key: Any = None
    new_value: Any = None
    old_value: Any = None


# ============================================================================
# TRACKING STATE
# ============================================================================


class _TrackingState(threading.local):
    def __init__(self):
        self.active_effect: Optional["ReactiveEffect"] = None
        self.should_track = True
        self.track_stack: List[bool] = []


_state = _TrackingState()

# id(target) -> (target, {key: set of effects}). The target is held only while
# something depends on it.
_target_map: Dict[int, Tuple[Any, Dict[Any, Set["ReactiveEffect"]]]] = {}
_map_lock = threading.RLock()


def _reset_state() -> None:
    """Reset the tracking state for testing."""
    global _state
    _state = _TrackingState()
    with _map_lock:
        _target_map.clear()


def pause_tracking() -> None:
    _state.track_stack.append(_state.should_track)
    _state.should_track = False


def enable_tracking() -> None:
    _state.track_stack.append(_state.should_track)
    _state.should_track = True


def reset_tracking() -> None:
    stack = _state.track_stack
    _state.should_track = stack.pop() if stack else True


def active_effect() -> Optional["ReactiveEffect"]:
    return _state.active_effect


def is_tracking() -> bool:
    return _state.should_track and _state.active_effect is not None


# ============================================================================
# EFFECTS
# ============================================================================


class ReactiveEffect:
    """
    A function re-run whenever something it read changes.

    Attributes:
        fn: The function to run
        scheduler: Called with the effect instead of running it on trigger
        deps: ``(target id, key)`` pairs the last run depended on
        active: False once stopped
        allow_recurse: Whether the effect's own writes may re-trigger it
    """

    def __init__(
        self,
        fn: Callable[[], Any],
        scheduler: Optional[Callable[["ReactiveEffect"], None]] = None,
        on_track: Optional[Callable[[DebuggerEvent], None]] = None,
        on_trigger: Optional[Callable[[DebuggerEvent], None]] = None,
    ) -> None:
        self.fn = fn
        self.scheduler = scheduler
        self.on_track = on_track
        self.on_trigger = on_trigger
        self.deps: Set[Tuple[int, Any]] = set()
        self.active = True
        self.allow_recurse = False

    def run(self) -> Any:
        """Run the function, collecting its dependencies afresh."""
        if not self.active:
            return self.fn()

        previous_effect = _state.active_effect
        previous_should_track = _state.should_track
        _cleanup_effect(self)
        _state.active_effect = self
        _state.should_track = True
        try:
            return self.fn()
        finally:
            _state.active_effect = previous_effect
            _state.should_track = previous_should_track

    __call__ = run

    def stop(self) -> None:
        """Remove every dependency and stop reacting to changes."""
        if self.active:
            _cleanup_effect(self)
            self.active = False

    def __repr__(self):
        name = getattr(self.fn, "__name__", repr(self.fn))
        return f"ReactiveEffect({name}, deps={len(self.deps)}, active={self.active})"


def _cleanup_effect(effect: ReactiveEffect) -> None:
    with _map_lock:
        for target_id, key in effect.deps:
            entry = _target_map.get(target_id)
            if entry is None:
                continue
            deps_map = entry[1]
            dep = deps_map.get(key)
            if dep is None:
                continue
            dep.discard(effect)
            if not dep:
                del deps_map[key]
            if not deps_map:
                del _target_map[target_id]
        effect.deps.clear()


def effect(
    fn: Callable[[], Any],
    lazy: bool = False,
    scheduler: Optional[Callable[[ReactiveEffect], None]] = None,
    on_track: Optional[Callable[[DebuggerEvent], None]] = None,
    on_trigger: Optional[Callable[[DebuggerEvent], None]] = None,
) -> ReactiveEffect:
    """Create an effect and, unless ``lazy``, run it once immediately."""
    runner = ReactiveEffect(
        fn, scheduler=scheduler, on_track=on_track, on_trigger=on_trigger
    )
    if not lazy:
        runner.run()
    return runner


def stop(runner: ReactiveEffect) -> None:
    runner.stop()


# ============================================================================
# TRACK / TRIGGER
# ============================================================================


def track(target: Any, type: TrackOpType, key: Any) -> None:
    """Record that the active effect read ``key`` of ``target``."""
    current = _state.active_effect
    if current is None or not _state.should_track:
        return

    target_id = id(target)
    with _map_lock:
        entry = _target_map.get(target_id)
        if entry is None or entry[0] is not target:
            entry = (target, {})
            _target_map[target_id] = entry
        dep = entry[1].setdefault(key, set())
        if current in dep:
            return
        dep.add(current)
        current.deps.add((target_id, key))

    if current.on_track is not None:
        current.on_track(DebuggerEvent(current, target, type, key))


def _collect(
    target: Any, type: TriggerOpType, key: Any, new_value: Any
) -> List[ReactiveEffect]:
    with _map_lock:
        entry = _target_map.get(id(target))
        if entry is None or entry[0] is not target:
            return []
        deps_map = entry[1]
        target_is_list = isinstance(target, list)
        selected: List[Set[ReactiveEffect]] = []

        if type is TriggerOpType.CLEAR:
            selected.extend(deps_map.values())
        elif target_is_list and key == LENGTH_KEY:
            for dep_key, dep in deps_map.items():
                if dep_key == LENGTH_KEY or (
                    is_integer_key(dep_key) and dep_key >= new_value
                ):
                    selected.append(dep)
        else:
            if key is not None and key in deps_map:
                selected.append(deps_map[key])
            if type is TriggerOpType.ADD:
                if not target_is_list:
                    selected.append(deps_map.get(ITERATE_KEY, set()))
                elif is_integer_key(key):
                    selected.append(deps_map.get(LENGTH_KEY, set()))
            elif type is TriggerOpType.DELETE and not target_is_list:
                selected.append(deps_map.get(ITERATE_KEY, set()))

        effects: List[ReactiveEffect] = []
        seen: Set[int] = set()
        for dep in selected:
            for dependent in list(dep):
                if id(dependent) not in seen:
                    seen.add(id(dependent))
                    effects.append(dependent)
        return effects


def trigger(
    target: Any,
    type: TriggerOpType,
    key: Any = None,
    new_value: Any = None,
    old_value: Any = None,
) -> None:
    """Re-run (or schedule) every effect that depends on the change."""
    current = _state.active_effect
    for dependent in _collect(target, type, key, new_value):
        if not dependent.active:
            continue
        if dependent is current and not dependent.allow_recurse:
            continue
        if dependent.on_trigger is not None:
            dependent.on_trigger(
                DebuggerEvent(dependent, target, type, key, new_value, old_value)
            )
        if dependent.scheduler is not None:
            dependent.scheduler(dependent)
        else:
            dependent.run()
