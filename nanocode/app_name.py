"""Process-wide application name used to locate app-specific resources."""

import logging
import threading

_DEFAULT_APP_NAME = "coding"
_ALLOWED_PUNCTUATION = frozenset("-_.")

_lock = threading.Lock()
_app_name = _DEFAULT_APP_NAME

_log = logging.getLogger(__name__)


def is_valid_app_name(name: str) -> bool:
    """Return True if the name is safe to use as a single path component."""
    if not name or name in (".", ".."):
        return False
    if "/" in name or "\\" in name:
        return False
    return all(
        (ch.isascii() and ch.isalnum()) or ch in _ALLOWED_PUNCTUATION for ch in name
    )


def get_app_name() -> str:
    """Return the current application name."""
    with _lock:
        return _app_name


def set_app_name(name: str) -> None:
    """Set the application name, falling back to the default if it is invalid."""
    global _app_name
    if not is_valid_app_name(name):
        _log.warning(
            "Invalid app name '%s', using default '%s' instead",
            name,
            _DEFAULT_APP_NAME,
        )
        name = _DEFAULT_APP_NAME
    with _lock:
        _app_name = name