"""
Dispatcher: fans one log call out to every registered sink.
"""

from __future__ import annotations

from .levels import LogLevel, is_included
from .sinks import BaseSink, ConsoleSink


class SimpleLogger:
    """
    Central coordinator for a set of sinks.

    A message must pass this logger's ``[min_level, max_level]`` gate and then
    each sink's own gate to be rendered there. Sinks are consulted in
    registration order; index 0 is conventionally the console sink.

    Not thread-safe: callers serialize concurrent access. Dispatch iterates a
    snapshot of the sink list, so a sink removed mid-dispatch is still visited
    once and never causes an error.
    """

    def __init__(self, *, min_level: LogLevel = LogLevel.DEBUG, max_level: LogLevel = LogLevel.FATAL):
        self.min_level = min_level
        self.max_level = max_level
        self._sinks: list[BaseSink] = []

    @classmethod
    def with_default_console(cls) -> SimpleLogger:
        """Build a logger with a ``ConsoleSink`` at index 0 that shows DEBUG and above."""
        logger = cls()
        logger.add_sink(ConsoleSink(min_level=LogLevel.DEBUG))
        return logger

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def log(self, message: str, level: LogLevel) -> None:
        if not is_included(level, self.min_level, self.max_level):
            return

        for sink in list(self._sinks):
            if sink is not None:
                sink.log(message, level)

    def exception(self, exc: BaseException) -> None:
        """Dispatch an exception as a FATAL event to every sink."""
        if self.max_level < LogLevel.FATAL:
            return

        for sink in list(self._sinks):
            if sink is not None:
                sink.exception(exc)

    # -------------------------------------------------------------------------
    # Level control
    # -------------------------------------------------------------------------

    def set_min_level(self, level: LogLevel) -> None:
        self.min_level = level

    def set_max_level(self, level: LogLevel) -> None:
        self.max_level = level

    def get_min_level(self) -> LogLevel:
        return self.min_level

    def get_max_level(self) -> LogLevel:
        return self.max_level

    # -------------------------------------------------------------------------
    # Sink registry
    # -------------------------------------------------------------------------

    @property
    def sinks(self) -> tuple[BaseSink, ...]:
        return tuple(self._sinks)

    def add_sink(self, sink: BaseSink | None) -> None:
        if sink is None:
            return
        self._sinks.append(sink)

    def remove_sink(self, sink: BaseSink | None) -> None:
        """Remove the first registered sink that *is* ``sink``; unknown sinks are ignored."""
        if sink is None:
            return
        for index, registered in enumerate(self._sinks):
            if registered is sink:
                del self._sinks[index]
                return

    def clear_sinks(self) -> None:
        self._sinks.clear()

    def get_sink(self, index: int) -> BaseSink | None:
        if index < 0 or index >= len(self._sinks):
            return None
        return self._sinks[index]

    def close(self) -> None:
        """Close every registered sink."""
        for sink in list(self._sinks):
            sink.close()
