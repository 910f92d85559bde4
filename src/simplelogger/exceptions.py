"""
Exception type shared by setup failures, assertions and the exception log path.
"""

from __future__ import annotations


class LogException(Exception):
    """Error carrying a human-readable message.

    Raised when a sink cannot be set up (e.g. an unopenable log file) and by
    ``log_assert``. Instances can also be handed to ``SimpleLogger.exception``.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self._message = message

    @property
    def message(self) -> str:
        return self._message


def describe_exception(exc: BaseException) -> str:
    """Return the message text for any exception."""
    if isinstance(exc, LogException):
        return exc.message
    return str(exc)
