"""
Log sink abstractions and concrete implementations.
"""

from __future__ import annotations

import os
import stat
import sys
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import TextIO

from .diagnostics import get_logger
from .exceptions import LogException, describe_exception
from .formatters import EXCEPTION_PREFIX, LineFormatter, colorize
from .levels import LogLevel, is_included

_log = get_logger(__name__)


class FileMode(str, Enum):
    APPEND = "append"
    OVERWRITE = "overwrite"


class ColorMode(str, Enum):
    OFF = "off"
    PARTIAL = "partial"  # Level tag only
    FULL = "full"  # Whole line


# =============================================================================
# Sink Abstraction
# =============================================================================


class BaseSink(ABC):
    """Abstract base class for log sinks.

    Every sink carries its own inclusive ``[min_level, max_level]`` gate, applied
    on top of the dispatcher's gate. Subclass this to write custom sinks.
    """

    def __init__(self, *, min_level: LogLevel = LogLevel.INFO, max_level: LogLevel = LogLevel.FATAL):
        self.min_level = min_level
        self.max_level = max_level

    def accepts(self, level: LogLevel) -> bool:
        return is_included(level, self.min_level, self.max_level)

    @abstractmethod
    def log(self, message: str, level: LogLevel) -> None:
        """Render a message if ``level`` passes this sink's gate."""
        ...

    def exception(self, exc: BaseException) -> None:
        """Record an exception as a FATAL message."""
        self.log(EXCEPTION_PREFIX + describe_exception(exc), LogLevel.FATAL)

    @abstractmethod
    def close(self) -> None:
        """Close the sink and release resources."""
        ...


# =============================================================================
# Console Sinks
# =============================================================================


class _StdioSink(BaseSink):
    """Shared stream routing: below ERROR to stdout, ERROR and FATAL to stderr.

    Streams default to the *current* ``sys.stdout``/``sys.stderr`` at write time.
    """

    def __init__(
        self,
        *,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        min_level: LogLevel = LogLevel.INFO,
        max_level: LogLevel = LogLevel.FATAL,
    ):
        super().__init__(min_level=min_level, max_level=max_level)
        self._stdout = stdout
        self._stderr = stderr

    def _route(self, level: LogLevel) -> tuple[TextIO, TextIO]:
        out = self._stdout or sys.stdout
        err = self._stderr or sys.stderr
        if level < LogLevel.ERROR:
            return out, err
        return err, out

    def _write(self, text: str, level: LogLevel) -> None:
        target, other = self._route(level)
        # Keep stdout/stderr ordered when both point at one terminal
        other.flush()
        target.flush()
        try:
            target.write(text)
        except UnicodeEncodeError:
            # Stream has a strict error handler; escape what it cannot encode
            encoding = getattr(target, "encoding", None) or "utf-8"
            target.write(text.encode(encoding, "backslashreplace").decode(encoding))
        target.flush()

    def close(self) -> None:
        pass


class SimpleConsoleSink(_StdioSink):
    """Plain console sink: one new line per message, optional full-line color."""

    def __init__(self, *, color: bool = False, **kwargs):
        super().__init__(**kwargs)
        self.color = color

    def log(self, message: str, level: LogLevel) -> None:
        if not self.accepts(level):
            return

        text = "\n" + LineFormatter.format_tag(level) + message + "  "
        if self.color:
            text = colorize(text, level)
        self._write(text, level)


class ConsoleSink(_StdioSink):
    """Console sink that collapses consecutive identical messages.

    A repeat of the previous (level, message) pair redraws the current line in
    place with a ``(Rep: N)`` counter instead of printing a new one.

    Args:
        color: Tint the level tag.
        full_color: Tint the whole line; overrides ``color``.
        collapse_repeats: ``True``/``False`` to force, ``None`` to collapse only
            when the target stream is a TTY. Off-TTY, repeats are written as new
            lines that still carry the counter.
    """

    def __init__(
        self,
        *,
        color: bool = False,
        full_color: bool = True,
        collapse_repeats: bool | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.color = color
        self.full_color = full_color
        self.collapse_repeats = collapse_repeats

        self.last_message = ""
        self.last_level = LogLevel.NONE
        self.repeat_count = 0

    @property
    def color_mode(self) -> ColorMode:
        if self.full_color:
            return ColorMode.FULL
        if self.color:
            return ColorMode.PARTIAL
        return ColorMode.OFF

    def log(self, message: str, level: LogLevel) -> None:
        if not self.accepts(level):
            return

        if level == self.last_level and message == self.last_message:
            self.repeat_count += 1
            suffix = f" (Rep: {self.repeat_count})"
            if self._should_collapse(level):
                self._write("\r" + self._render(message, level, suffix=suffix, new_line=False), level)
            else:
                self._write(self._render(message, level, suffix=suffix), level)
            return

        self.repeat_count = 1
        self.last_message = message
        self.last_level = level
        self._write(self._render(message, level), level)

    def _should_collapse(self, level: LogLevel) -> bool:
        if self.collapse_repeats is not None:
            return self.collapse_repeats
        target, _ = self._route(level)
        return bool(getattr(target, "isatty", lambda: False)())

    def _render(self, message: str, level: LogLevel, *, suffix: str = "", new_line: bool = True) -> str:
        text = LineFormatter.format_tag(level, suffix=suffix, color=self.color and not self.full_color) + message
        if new_line:
            text = "\n" + text + "  "
        if self.full_color:
            text = colorize(text, level)
        return text


# =============================================================================
# File Sink
# =============================================================================


class FileSink(BaseSink):
    """Appends plain formatted lines to a file it owns.

    Args:
        path: File to open immediately; ``None`` leaves the sink closed until
            ``open_file`` is called.
        mode: ``FileMode.APPEND`` (create or extend) or ``FileMode.OVERWRITE``
            (truncate or create).

    Raises:
        LogException: If the file cannot be opened.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        mode: FileMode | str = FileMode.APPEND,
        *,
        min_level: LogLevel = LogLevel.INFO,
        max_level: LogLevel = LogLevel.FATAL,
    ):
        self._file: TextIO | None = None
        self._path: Path | None = None
        self._sync = False
        super().__init__(min_level=min_level, max_level=max_level)
        if path is not None:
            self.open_file(path, mode)

    @property
    def path(self) -> Path | None:
        return self._path

    @property
    def is_open(self) -> bool:
        return self._file is not None and not self._file.closed

    def open_file(self, path: str | Path, mode: FileMode | str = FileMode.APPEND) -> None:
        """Open ``path`` for logging, replacing any file already open."""
        try:
            mode = FileMode(mode)
        except ValueError as exc:
            raise LogException(f"Unknown log file mode: {mode!r}") from exc

        target = Path(path)
        try:
            handle = open(
                target,
                "w" if mode is FileMode.OVERWRITE else "a",
                encoding="utf-8",
                errors="backslashreplace",
            )
        except OSError as exc:
            raise LogException(f"Could not open log file: {target}") from exc

        self.close_file()
        self._file = handle
        # fsync rejects pipes and character devices
        self._sync = stat.S_ISREG(os.fstat(handle.fileno()).st_mode)
        self._path = target
        _log.debug("log_file_opened", path=str(target), mode=mode.value)

    def close_file(self) -> None:
        if self._file is None:
            return
        if not self._file.closed:
            self._file.close()
            _log.debug("log_file_closed", path=str(self._path))
        self._file = None

    def log(self, message: str, level: LogLevel) -> None:
        if not self.is_open or not self.accepts(level):
            return

        self._file.write(LineFormatter.format_line(message, level) + "\n")
        self._file.flush()
        if self._sync:
            os.fsync(self._file.fileno())

    def close(self) -> None:
        self.close_file()

    def __enter__(self) -> FileSink:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close_file()

    def __del__(self) -> None:
        if self._file is not None and not self._file.closed:
            self._file.close()
