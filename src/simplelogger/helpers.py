"""
Call-site shortcuts bound to the global logger.

Each helper checks ``simplelogger.config.settings`` first, so setting
``SL_MIN_LEVEL=warning`` silences ``log_debug``/``log_info`` without touching
the dispatcher, and ``SL_DEBUG=false`` disables debug output and assertions.
"""

from __future__ import annotations

from pathlib import Path

from . import config
from ._version import __version__
from .core import capture_exceptions, get_global_logger
from .exceptions import LogException
from .levels import LogLevel
from .sinks import BaseSink, FileMode, FileSink


def _emit(message: str, level: LogLevel) -> None:
    if level < config.settings.min_level:
        return
    get_global_logger().log(message, level)


def log_debug(message: str) -> None:
    if config.settings.debug:
        _emit(message, LogLevel.DEBUG)


def log_info(message: str) -> None:
    _emit(message, LogLevel.INFO)


def log_warning(message: str) -> None:
    _emit(message, LogLevel.WARNING)


def log_error(message: str) -> None:
    _emit(message, LogLevel.ERROR)


def log_fatal(message: str) -> None:
    _emit(message, LogLevel.FATAL)


def log_exception(exc: BaseException) -> None:
    get_global_logger().exception(exc)


def log_assert(condition: object, message: str) -> None:
    """Raise ``LogException(message)`` when ``condition`` is false (debug builds only)."""
    if config.settings.debug and not condition:
        raise LogException(message)


def log_to_file(
    path: str | Path,
    mode: FileMode | str = FileMode.APPEND,
    *,
    min_level: LogLevel | None = None,
) -> FileSink:
    """Open a file sink and register it on the global logger."""
    sink = FileSink(path, mode)
    if min_level is not None:
        sink.min_level = min_level
    get_global_logger().add_sink(sink)
    return sink


def get_console_sink() -> BaseSink | None:
    """The sink at index 0 of the global logger, normally the default console."""
    return get_global_logger().get_sink(0)


def log_version_info(name: str = "SimpleLogger", version: str = __version__) -> None:
    log_info(f"{name} v{version}")


__all__ = [
    "capture_exceptions",
    "get_console_sink",
    "log_assert",
    "log_debug",
    "log_error",
    "log_exception",
    "log_fatal",
    "log_info",
    "log_to_file",
    "log_version_info",
    "log_warning",
]
