"""Error reporting shared by the geometry and font modules."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Optional

_logger = logging.getLogger(__name__)


class Severity(IntEnum):
    """How serious a reported error is."""

    DEBUG = 0
    WARNING = 1
    FATAL = 2


class SgError(Exception):
    """Raised when an operation cannot produce a meaningful result."""

    def __init__(self, message: str, severity: Severity = Severity.WARNING) -> None:
        super().__init__(message)
        self.message = message
        self.severity = severity


ErrorCallback = Callable[[Severity, str], None]

_last_error: Optional[str] = None
_callback: Optional[ErrorCallback] = None

_LOG_LEVELS = {
    Severity.DEBUG: logging.DEBUG,
    Severity.WARNING: logging.WARNING,
    Severity.FATAL: logging.ERROR,
}


def set_error(severity: Severity, message: str) -> None:
    """Record an error and hand it to the installed callback.

    Without a callback the message is logged; a fatal error then raises
    :class:`SgError`.
    """
    global _last_error
    severity = Severity(severity)
    _last_error = message
    if _callback is not None:
        _callback(severity, message)
        return
    _logger.log(_LOG_LEVELS[severity], message)
    if severity is Severity.FATAL:
        raise SgError(message, severity)


def get_error() -> Optional[str]:
    """Return the most recently reported message, or None."""
    return _last_error


def clear_error() -> None:
    """Forget the most recently reported message."""
    global _last_error
    _last_error = None


def get_error_callback() -> Optional[ErrorCallback]:
    """Return the installed error callback, or None."""
    return _callback


def set_error_callback(callback: Optional[ErrorCallback]) -> None:
    """Install a callback taking (severity, message); None restores the default."""
    global _callback
    _callback = callback


def fail(message: str, severity: Severity = Severity.WARNING) -> None:
    """Report ``message`` and raise :class:`SgError` for it."""
    set_error(severity, message)
    raise SgError(message, severity)