"""Tests for target classification and skip marking."""

import datetime
import gc
import re
from dataclasses import dataclass

import pytest

from lucent import mark_skip, reactive
from lucent.classifier import (
    Shape,
    TargetType,
    get_target_type,
    is_extensible,
    is_skipped,
    shape_of,
    skip_registry,
)


class Plain:
    def __init__(self):
        self.value = 1


class SlotsOnly:
    __slots__ = ("value",)


@dataclass(frozen=True)
class FrozenPoint:
    x: int
    y: int


class Opaque:
    __v_skip__ = True


@pytest.mark.unit
class TestTargetType:
    """Classification of values into INVALID, COMMON and COLLECTION."""

    def test_records_sequences_and_instances_are_common(self):
        """dicts, lists and ordinary instances can be observed."""
        assert get_target_type({}) is TargetType.COMMON
        assert get_target_type([]) is TargetType.COMMON
        assert get_target_type(Plain()) is TargetType.COMMON

    @pytest.mark.parametrize("value", [None, True, 0, 1.5, 2j, "text", b"bytes"])
    def test_primitives_are_invalid(self, value):
        """Primitive values are never observable."""
        assert get_target_type(value) is TargetType.INVALID

    def test_immutable_containers_are_invalid(self):
        """Tuples, frozensets and frozen dataclasses cannot be extended."""
        assert get_target_type((1, 2)) is TargetType.INVALID
        assert get_target_type(frozenset({1})) is TargetType.INVALID
        assert get_target_type(FrozenPoint(1, 2)) is TargetType.INVALID

    def test_slot_only_instances_are_invalid(self):
        """Instances without a __dict__ cannot gain attributes."""
        assert not is_extensible(SlotsOnly())
        assert get_target_type(SlotsOnly()) is TargetType.INVALID

    def test_intrinsic_objects_are_invalid(self):
        """Runtime objects such as dates, patterns and functions are ineligible."""
        for value in (
            datetime.date(2024, 1, 1),
            re.compile("a+"),
            ValueError("boom"),
            lambda: None,
            len,
            Plain,
        ):
            assert get_target_type(value) is TargetType.INVALID, value

    def test_sets_are_collections(self):
        """Hash collections are classified separately."""
        assert get_target_type({1, 2}) is TargetType.COLLECTION

    def test_sets_are_extensible_but_frozensets_are_not(self):
        assert is_extensible({1, 2})
        assert not is_extensible(frozenset({1, 2}))


@pytest.mark.unit
class TestShape:
    def test_shape_follows_runtime_type(self):
        assert shape_of({}) is Shape.RECORD
        assert shape_of([]) is Shape.SEQUENCE
        assert shape_of(Plain()) is Shape.ATTRIBUTES

    def test_wrappers_report_their_raw_shape(self):
        """A wrapper is classified like the value it stands for."""
        assert shape_of(reactive({})) is Shape.RECORD
        assert shape_of(reactive([])) is Shape.SEQUENCE
        assert shape_of(reactive(Plain())) is Shape.ATTRIBUTES


@pytest.mark.unit
class TestSkipMarking:
    """Values and classes can opt out of observation."""

    def test_marked_value_is_returned_unwrapped(self):
        """mark_skip returns its argument and reactive() then leaves it alone."""
        raw = {"a": 1}
        assert mark_skip(raw) is raw
        assert is_skipped(raw)
        assert get_target_type(raw) is TargetType.INVALID
        assert reactive(raw) is raw

    def test_marked_value_stays_raw_when_nested(self):
        """A skipped value read through a wrapper is not wrapped."""
        inner = mark_skip(Plain())
        state = reactive({"inner": inner})
        assert state["inner"] is inner

    def test_class_attribute_opts_out_every_instance(self):
        """__v_skip__ = True on a class skips all of its instances."""
        opaque = Opaque()
        assert is_skipped(opaque)
        assert reactive(opaque) is opaque

    def test_non_extensible_values_are_not_registered(self):
        """Marking a value that cannot be extended is a no-op."""
        before = len(skip_registry)
        point = (1, 2)
        assert mark_skip(point) is point
        assert len(skip_registry) == before

    def test_collected_values_leave_the_registry(self):
        """Weakly referenceable values are dropped once collected."""
        before = len(skip_registry)
        value = Plain()
        mark_skip(value)
        assert len(skip_registry) == before + 1

        del value
        gc.collect()
        assert len(skip_registry) == before

    def test_marking_twice_registers_once(self):
        value = Plain()
        before = len(skip_registry)
        mark_skip(value)
        mark_skip(value)
        assert len(skip_registry) == before + 1
