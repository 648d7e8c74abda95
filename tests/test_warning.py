"""Tests for development diagnostics."""

from lucent import is_dev_mode, readonly, set_dev_mode, warn


class BrokenRepr:
    def __repr__(self):
        raise RuntimeError("no repr")


def test_warn_logs_with_prefix(lucent_warnings):
    warn("something happened")
    assert lucent_warnings() == ["[lucent warn]: something happened"]


def test_warn_appends_context(lucent_warnings):
    warn("bad value:", [1, 2])
    assert lucent_warnings() == ["[lucent warn]: bad value: [1, 2]"]


def test_warn_survives_broken_repr(lucent_warnings):
    warn("context:", BrokenRepr())
    assert "repr failed" in lucent_warnings()[0]


def test_dev_mode_toggle_silences_warnings(lucent_warnings):
    set_dev_mode(False)
    assert not is_dev_mode()

    warn("hidden")
    readonly({"a": 1})["a"] = 2

    assert lucent_warnings() == []

    set_dev_mode(True)
    warn("shown")
    assert lucent_warnings() == ["[lucent warn]: shown"]
