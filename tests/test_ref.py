"""Tests for refs and computed refs."""

import pytest

from lucent import (
    computed,
    effect,
    is_reactive,
    is_readonly,
    is_ref,
    reactive,
    readonly,
    ref,
    shallow_ref,
    to_raw,
    trigger_ref,
    unref,
)


def record_runs(fn):
    runs = []
    effect(lambda: runs.append(fn()))
    return runs


@pytest.mark.unit
class TestRef:
    def test_value_reads_and_writes(self):
        cell = ref(1)
        cell.value = 2
        assert cell.value == 2

    def test_ref_of_ref_is_the_same_ref(self):
        cell = ref(1)
        assert ref(cell) is cell
        assert shallow_ref(cell) is cell

    def test_is_ref_and_unref(self):
        cell = ref("x")
        assert is_ref(cell)
        assert not is_ref("x")
        assert unref(cell) == "x"
        assert unref("y") == "y"

    def test_deep_ref_wraps_objects(self):
        raw = {"a": 1}
        cell = ref(raw)

        assert is_reactive(cell.value)
        assert to_raw(cell.value) is raw

    def test_shallow_ref_keeps_objects_raw(self):
        raw = {"a": 1}
        assert shallow_ref(raw).value is raw

    def test_repr(self):
        assert repr(ref(3)) == "Ref(3)"


@pytest.mark.integration
class TestRefTracking:
    def test_effect_reruns_on_change(self):
        cell = ref(0)
        runs = record_runs(lambda: cell.value)

        cell.value = 1
        cell.value = 1

        assert runs == [0, 1]

    def test_assigning_the_wrapper_of_the_same_raw_is_a_no_op(self):
        raw = {"a": 1}
        cell = ref(raw)
        runs = record_runs(lambda: cell.value)

        cell.value = reactive(raw)

        assert len(runs) == 1

    def test_nested_writes_in_deep_ref_notify(self):
        cell = ref({"a": 1})
        runs = record_runs(lambda: cell.value["a"])

        cell.value["a"] = 2

        assert runs == [1, 2]

    def test_trigger_ref_forces_rerun_of_shallow_ref(self):
        cell = shallow_ref({"a": 1})
        runs = record_runs(lambda: cell.value["a"])

        cell.value["a"] = 2
        assert runs == [1]

        trigger_ref(cell)
        assert runs == [1, 2]

    def test_readonly_view_of_ref(self, lucent_warnings):
        cell = ref(1)
        view = readonly(cell)

        assert view.value == 1
        view.value = 2

        assert cell.value == 1
        assert lucent_warnings()


@pytest.mark.integration
class TestComputed:
    def test_computed_is_lazy_and_cached(self):
        state = reactive({"n": 1})
        calls = []

        def double():
            calls.append(1)
            return state["n"] * 2

        doubled = computed(double)
        assert calls == []

        assert doubled.value == 2
        assert doubled.value == 2
        assert len(calls) == 1

        state["n"] = 3
        assert len(calls) == 1
        assert doubled.value == 6
        assert len(calls) == 2

    def test_effects_depending_on_computed_rerun(self):
        count = ref(1)
        doubled = computed(lambda: count.value * 2)
        runs = record_runs(lambda: doubled.value)

        count.value = 2

        assert runs == [2, 4]

    def test_computed_without_setter_is_readonly(self, lucent_warnings):
        doubled = computed(lambda: 2)

        assert is_readonly(doubled)
        doubled.value = 5

        assert doubled.value == 2
        assert any("computed value is readonly" in m for m in lucent_warnings())

    def test_writable_computed_calls_setter(self):
        count = ref(1)
        plus_one = computed(
            lambda: count.value + 1,
            lambda value: setattr(count, "value", value - 1),
        )

        plus_one.value = 10

        assert count.value == 9
        assert plus_one.value == 10
        assert not is_readonly(plus_one)

    def test_failing_getter_is_retried(self):
        state = {"fail": True}

        def getter():
            if state["fail"]:
                raise RuntimeError("not ready")
            return "ready"

        value = computed(getter)
        with pytest.raises(RuntimeError):
            value.value

        state["fail"] = False
        assert value.value == "ready"
