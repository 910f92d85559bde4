"""
Interceptors for routing standard library and structlog events into a SimpleLogger.
"""

from __future__ import annotations

import logging
from typing import Any

import orjson
import structlog
from structlog.typing import EventDict, WrappedLogger

from .core import get_global_logger
from .diagnostics import is_internal
from .dispatcher import SimpleLogger
from .levels import LogLevel

_TO_STDLIB = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.FATAL: logging.CRITICAL,
}

_STRUCTLOG_METHODS = {
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "msg": LogLevel.INFO,
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "exception": LogLevel.ERROR,
    "critical": LogLevel.FATAL,
    "fatal": LogLevel.FATAL,
}


def level_from_stdlib(levelno: int) -> LogLevel:
    """Map a stdlib level number onto the nearest LogLevel at or below it."""
    if levelno >= logging.CRITICAL:
        return LogLevel.FATAL
    if levelno >= logging.ERROR:
        return LogLevel.ERROR
    if levelno >= logging.WARNING:
        return LogLevel.WARNING
    if levelno >= logging.INFO:
        return LogLevel.INFO
    return LogLevel.DEBUG


def level_to_stdlib(level: LogLevel) -> int:
    return _TO_STDLIB[level]


def orjson_dumps(v: Any) -> str:
    """Compact JSON with sorted keys; unknown types fall back to ``str``."""
    return orjson.dumps(v, default=str, option=orjson.OPT_SORT_KEYS | orjson.OPT_NON_STR_KEYS).decode()


# =============================================================================
# Standard Library Logging
# =============================================================================


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records to a SimpleLogger.

    Records emitted by SimpleLogger's own diagnostics are skipped so that sink
    lifecycle events cannot feed back into the sinks.
    """

    def __init__(self, logger: SimpleLogger | None = None, level: int = logging.NOTSET):
        super().__init__(level)
        self._logger = logger
        self.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    @property
    def target(self) -> SimpleLogger:
        return self._logger if self._logger is not None else get_global_logger()

    def emit(self, record: logging.LogRecord) -> None:
        if is_internal(record.name):
            return
        try:
            self.target.log(self.format(record), level_from_stdlib(record.levelno))
        except Exception:
            self.handleError(record)


def intercept_stdlib_logging(
    logger: SimpleLogger | None = None,
    level: LogLevel = LogLevel.DEBUG,
) -> RedirectStdLibHandler:
    """Replace the root logger's handlers with a RedirectStdLibHandler."""
    handler = RedirectStdLibHandler(logger)
    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level_to_stdlib(level))
    root_logger.addHandler(handler)
    return handler


# =============================================================================
# Structlog
# =============================================================================


class SimpleLoggerProcessor:
    """
    Terminal structlog processor that hands events to a SimpleLogger.

    The ``event`` becomes the message; remaining keys are appended as a compact
    JSON object and a formatted traceback, if any, on the following lines.
    The event is then dropped so structlog prints nothing itself.
    """

    def __init__(self, logger: SimpleLogger | None = None):
        self._logger = logger

    @property
    def target(self) -> SimpleLogger:
        return self._logger if self._logger is not None else get_global_logger()

    def __call__(self, logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        fields = dict(event_dict)
        level_key = str(fields.pop("level", method_name)).lower()
        level = _STRUCTLOG_METHODS.get(level_key, LogLevel.INFO)
        traceback_text = fields.pop("exception", None)

        message = str(fields.pop("event", ""))
        if fields:
            message = f"{message} {orjson_dumps(fields)}"
        if traceback_text:
            message = f"{message}\n{traceback_text}"

        self.target.log(message, level)
        raise structlog.DropEvent


def configure_structlog(
    logger: SimpleLogger | None = None,
    level: LogLevel = LogLevel.DEBUG,
) -> None:
    """Configure structlog so that every bound logger writes through ``logger``."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            SimpleLoggerProcessor(logger),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_to_stdlib(level)),
        context_class=dict,
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )
