"""
Process-wide logger, uncaught-exception capture and settings-driven setup.
"""

from __future__ import annotations

import atexit
import sys
import threading
from pathlib import Path
from types import TracebackType

from . import config
from .config import LoggingSettings
from .diagnostics import get_logger
from .dispatcher import SimpleLogger
from .exceptions import LogException
from .sinks import BaseSink, ConsoleSink, FileSink, SimpleConsoleSink

_log = get_logger(__name__)

# =============================================================================
# Global State
# =============================================================================

_global_logger: SimpleLogger | None = None
_global_lock = threading.Lock()


def get_global_logger() -> SimpleLogger:
    """Return the process-wide logger, creating it on first use.

    The first call registers a ``ConsoleSink`` at index 0 that shows DEBUG and
    above, and arranges for every sink to be closed at interpreter exit.
    """
    global _global_logger

    if _global_logger is None:
        with _global_lock:
            if _global_logger is None:
                logger = SimpleLogger.with_default_console()
                atexit.register(logger.close)
                _global_logger = logger
                _log.debug("global_logger_created")
    return _global_logger


# =============================================================================
# Uncaught Exception Capture
# =============================================================================


class _CapturingExceptHook:
    """``sys.excepthook`` replacement that records the exception before exiting."""

    def __init__(self, logger: SimpleLogger | None, previous):
        self.logger = logger
        self.previous = previous

    def _record(self, exc: BaseException) -> None:
        target = self.logger if self.logger is not None else get_global_logger()
        target.exception(exc)

    def __call__(
        self,
        exc_type: type[BaseException],
        exc: BaseException,
        tb: TracebackType | None,
    ) -> None:
        try:
            self._record(exc)
        finally:
            self.previous(exc_type, exc, tb)


class _CapturingThreadHook(_CapturingExceptHook):
    """``threading.excepthook`` replacement for exceptions escaping worker threads."""

    def __call__(self, args: threading.ExceptHookArgs) -> None:
        try:
            if args.exc_value is not None:
                self._record(args.exc_value)
        finally:
            self.previous(args)


def capture_exceptions(logger: SimpleLogger | None = None) -> None:
    """Log any exception escaping the program or a thread at FATAL.

    Covers ``sys.excepthook`` (the process then ends as usual) and
    ``threading.excepthook``. The previously installed hooks still run after
    the exception is recorded, even if recording fails. Uses the global logger
    when ``logger`` is None. Calling it again while the hooks are installed
    does nothing.
    """
    if not isinstance(sys.excepthook, _CapturingExceptHook):
        sys.excepthook = _CapturingExceptHook(logger, sys.excepthook)
    if not isinstance(threading.excepthook, _CapturingThreadHook):
        threading.excepthook = _CapturingThreadHook(logger, threading.excepthook)
    _log.debug("exception_capture_installed")


def release_exceptions() -> None:
    """Restore the hooks that were active before ``capture_exceptions``."""
    if isinstance(sys.excepthook, _CapturingExceptHook):
        sys.excepthook = sys.excepthook.previous
    if isinstance(threading.excepthook, _CapturingThreadHook):
        threading.excepthook = threading.excepthook.previous
    _log.debug("exception_capture_released")


# =============================================================================
# Configuration Logic
# =============================================================================


def _build_sinks(settings: LoggingSettings) -> list[BaseSink]:
    built: list[BaseSink] = []
    try:
        for name in settings.sink_names:
            if name == "console":
                built.append(
                    ConsoleSink(
                        color=settings.console_color,
                        full_color=settings.console_full_color,
                        min_level=settings.console_min_level,
                    )
                )
            elif name == "simple_console":
                built.append(SimpleConsoleSink(color=settings.console_color, min_level=settings.console_min_level))
            elif name == "file":
                path = Path(settings.file_path)
                path.parent.mkdir(parents=True, exist_ok=True)
                built.append(FileSink(path, settings.file_mode, min_level=settings.file_min_level))
            else:
                raise LogException(f"Unknown sink: {name}")
    except (LogException, OSError) as exc:
        for sink in built:
            sink.close()
        if isinstance(exc, LogException):
            raise
        raise LogException(f"Could not create log directory for {settings.file_path}") from exc
    return built


def configure_logging(
    settings: LoggingSettings | None = None,
    logger: SimpleLogger | None = None,
) -> SimpleLogger:
    """
    Replace a logger's sinks with the ones described by ``settings``.

    Args:
        settings: Defaults to ``simplelogger.config.settings``.
        logger: Defaults to the global logger.

    Raises:
        LogException: If a sink cannot be created. The logger keeps its
            previous sinks in that case.
    """
    settings = settings if settings is not None else config.settings
    logger = logger if logger is not None else get_global_logger()

    sinks = _build_sinks(settings)

    logger.close()
    logger.clear_sinks()
    for sink in sinks:
        logger.add_sink(sink)

    _log.debug("sinks_configured", sinks=settings.sink_names)
    return logger
