"""
Development diagnostics.

``warn`` is a no-op outside development mode and never raises.
"""

import logging
from typing import Any

logger = logging.getLogger("lucent")

_dev_mode = __debug__


def set_dev_mode(enabled: bool) -> None:
    """Turn development diagnostics on or off."""
    global _dev_mode
    _dev_mode = bool(enabled)


def is_dev_mode() -> bool:
    return _dev_mode


def _describe(value: Any) -> str:
    try:
        return repr(value)
    except Exception:
        return f"<{type(value).__name__} (repr failed)>"


def warn(message: str, *context: Any) -> None:
    """Log a development warning, optionally naming the objects involved."""
    if not _dev_mode:
        return
    if context:
        message = f"{message} " + " ".join(_describe(item) for item in context)
    logger.warning(f"[lucent warn]: {message}")
