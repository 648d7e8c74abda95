"""
Lucent - Transparent Reactive Wrappers

Wraps dicts, lists and ordinary objects in stand-ins that record every read
as a dependency and announce every meaningful write, so effects re-run when
the data they used changes.
"""

# Wrapper construction and flag queries from factory.py
from .factory import (
    is_proxy,
    is_reactive,
    is_readonly,
    is_shallow,
    is_wrapped,
    mark_raw,
    mark_skip,
    reactive,
    readonly,
    shallow_reactive,
    shallow_readonly,
    to_raw,
    to_reactive,
    to_readonly,
    unwrap,
    wrap,
)

# Classification from classifier.py
from .classifier import Shape, TargetType, get_target_type

# Shared constants
from .constants import (
    ITERATE_KEY,
    LENGTH_KEY,
    ReactiveFlags,
    TrackOpType,
    TriggerOpType,
    Variant,
)

# Dependency engine from effect.py
from .effect import (
    DebuggerEvent,
    ReactiveEffect,
    effect,
    enable_tracking,
    pause_tracking,
    reset_tracking,
    stop,
    track,
    trigger,
)

# Reference cells from ref.py
from .ref import (
    ComputedRef,
    Ref,
    computed,
    is_ref,
    ref,
    shallow_ref,
    trigger_ref,
    unref,
)

# Development diagnostics
from .warning import is_dev_mode, set_dev_mode, warn

__all__ = [
    # Factory
    "reactive",
    "shallow_reactive",
    "readonly",
    "shallow_readonly",
    "wrap",
    "to_raw",
    "unwrap",
    "to_reactive",
    "to_readonly",
    "mark_raw",
    "mark_skip",
    # Flag queries
    "is_reactive",
    "is_wrapped",
    "is_readonly",
    "is_shallow",
    "is_proxy",
    # Classification
    "Shape",
    "TargetType",
    "get_target_type",
    # Constants
    "ITERATE_KEY",
    "LENGTH_KEY",
    "ReactiveFlags",
    "TrackOpType",
    "TriggerOpType",
    "Variant",
    # Effects
    "DebuggerEvent",
    "ReactiveEffect",
    "effect",
    "stop",
    "track",
    "trigger",
    "pause_tracking",
    "enable_tracking",
    "reset_tracking",
    # Refs
    "Ref",
    "ComputedRef",
    "ref",
    "shallow_ref",
    "computed",
    "is_ref",
    "unref",
    "trigger_ref",
    # Diagnostics
    "warn",
    "set_dev_mode",
    "is_dev_mode",
]
