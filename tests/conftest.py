"""
Shared pytest fixtures and configuration for Lucent tests.
"""

import logging

import pytest

from lucent.effect import _reset_state
from lucent.warning import set_dev_mode


@pytest.fixture(autouse=True)
def reset_tracking_state():
    """Reset the dependency engine and enable diagnostics before each test."""
    _reset_state()
    set_dev_mode(True)
    yield
    set_dev_mode(True)


@pytest.fixture
def lucent_log(caplog):
    """Capture records emitted on the ``lucent`` logger."""
    caplog.set_level(logging.DEBUG, logger="lucent")
    return caplog


@pytest.fixture
def lucent_warnings(lucent_log):
    """Return a callable listing the warning messages logged so far."""

    def messages():
        return [
            record.getMessage()
            for record in lucent_log.records
            if record.name == "lucent" and record.levelno == logging.WARNING
        ]

    return messages
