"""Tests for the dependency engine."""

import threading

import pytest

from lucent import (
    ReactiveEffect,
    TrackOpType,
    TriggerOpType,
    effect,
    enable_tracking,
    pause_tracking,
    reactive,
    reset_tracking,
    stop,
    track,
    trigger,
)
from lucent.effect import _target_map, active_effect, is_tracking


@pytest.mark.unit
class TestEffectLifecycle:
    def test_effect_runs_immediately(self):
        runs = []
        effect(lambda: runs.append(1))
        assert runs == [1]

    def test_lazy_effect_waits_for_first_run(self):
        runs = []
        runner = effect(lambda: runs.append(1), lazy=True)
        assert runs == []

        runner()
        assert runs == [1]

    def test_run_returns_the_function_result(self):
        runner = ReactiveEffect(lambda: 42)
        assert runner.run() == 42

    def test_stopped_effect_no_longer_reacts(self):
        state = reactive({"n": 0})
        runs = []
        runner = effect(lambda: runs.append(state["n"]))

        stop(runner)
        state["n"] = 1

        assert runs == [0]
        assert not runner.active
        assert runner.deps == set()

    def test_active_effect_is_restored_after_run(self):
        seen = []
        runner = effect(lambda: seen.append(active_effect()))

        assert seen == [runner]
        assert active_effect() is None

    def test_repr_mentions_state(self):
        def render():
            pass

        assert "render" in repr(effect(render))


@pytest.mark.integration
class TestDependencies:
    def test_dependencies_are_refreshed_on_every_run(self):
        """A branch that is no longer taken stops notifying."""
        state = reactive({"use_a": True, "a": 1, "b": 2})
        runs = record_runs(lambda: state["a"] if state["use_a"] else state["b"])

        state["use_a"] = False
        assert runs == [1, 2]

        state["a"] = 10
        assert runs == [1, 2]

        state["b"] = 20
        assert runs == [1, 2, 20]

    def test_effect_does_not_retrigger_itself(self):
        state = reactive({"n": 0})

        def bump():
            state["n"] = state["n"] + 1

        effect(bump)

        assert state["n"] == 1

    def test_nested_effects_restore_the_outer_effect(self):
        state = reactive({"outer": 0, "inner": 0})
        outer_runs = []
        inner_runs = []

        def outer():
            outer_runs.append(state["outer"])
            effect(lambda: inner_runs.append(state["inner"]))

        effect(outer)
        state["outer"] = 1

        assert outer_runs == [0, 1]

        state["inner"] = 5
        assert outer_runs == [0, 1]
        assert inner_runs[-1] == 5

    def test_paused_reads_are_not_tracked(self):
        state = reactive({"seen": 0, "hidden": 0})

        def read():
            value = state["seen"]
            pause_tracking()
            try:
                value += state["hidden"]
            finally:
                reset_tracking()
            return value

        runs = record_runs(read)
        state["hidden"] = 1
        assert runs == [0]

        state["seen"] = 1
        assert runs == [0, 2]

    def test_enable_tracking_inside_a_paused_section(self):
        state = reactive({"n": 0})

        def read():
            pause_tracking()
            enable_tracking()
            value = state["n"]
            reset_tracking()
            reset_tracking()
            return value

        runs = record_runs(read)
        state["n"] = 1

        assert runs == [0, 1]

    def test_scheduler_replaces_rerun(self):
        state = reactive({"n": 0})
        scheduled = []
        runs = []

        effect(lambda: runs.append(state["n"]), scheduler=scheduled.append)
        state["n"] = 1

        assert runs == [0]
        assert len(scheduled) == 1
        assert isinstance(scheduled[0], ReactiveEffect)

    def test_stopping_the_last_dependent_forgets_the_target(self):
        state = reactive({"n": 0})
        runner = effect(lambda: state["n"])
        assert _target_map

        stop(runner)
        assert not _target_map


@pytest.mark.unit
class TestTrackAndTrigger:
    """track and trigger used directly, without wrappers."""

    def test_manual_track_and_trigger(self):
        target = object()
        runs = []

        def read():
            track(target, TrackOpType.GET, "key")
            runs.append(len(runs))

        effect(read)
        trigger(target, TriggerOpType.SET, "key", 1, 0)
        trigger(target, TriggerOpType.SET, "other", 1, 0)

        assert runs == [0, 1]

    def test_clear_reaches_every_dependent(self):
        target = {}
        runs = []

        def read():
            track(target, TrackOpType.GET, "a")
            runs.append("a")

        effect(read)
        trigger(target, TriggerOpType.CLEAR)

        assert runs == ["a", "a"]

    def test_track_outside_an_effect_is_ignored(self):
        track(object(), TrackOpType.GET, "key")
        assert not is_tracking()
        assert not _target_map

    def test_tracking_state_is_per_thread(self):
        state = reactive({"n": 0})
        observed = []

        def outer():
            state["n"]
            thread = threading.Thread(target=lambda: observed.append(active_effect()))
            thread.start()
            thread.join()

        effect(outer)

        assert observed == [None]


def record_runs(fn):
    runs = []
    effect(lambda: runs.append(fn()))
    return runs
