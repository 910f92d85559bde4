"""
Line formatting and color utilities.
"""

from __future__ import annotations

from datetime import datetime

from .levels import LEVEL_NAME_WIDTH, LogLevel, format_from_left, level_name

# =============================================================================
# ANSI Colors
# =============================================================================

RESET_COLOR = "\033[0m"

LEVEL_COLORS = {
    LogLevel.NONE: RESET_COLOR,
    LogLevel.DEBUG: "\033[34m",  # Blue
    LogLevel.INFO: "\033[32m",  # Green
    LogLevel.WARNING: "\033[33m",  # Yellow
    LogLevel.ERROR: "\033[31m",  # Red
    LogLevel.FATAL: "\033[41m",  # Red background
}

EXCEPTION_PREFIX = "Uncaught Exception Occurred! "


def colorize(text: str, level: LogLevel) -> str:
    """Wrap text in the color of ``level``."""
    return f"{LEVEL_COLORS[level]}{text}{RESET_COLOR}"


# =============================================================================
# Line Formatter
# =============================================================================


class LineFormatter:
    """Builds the ``[timestamp LEVEL]: message`` lines shared by every sink."""

    TIMESTAMP_FORMAT = "%d/%m/%Y %H:%M:%S"
    LEVEL_WIDTH = LEVEL_NAME_WIDTH

    @classmethod
    def format_timestamp(cls, now: datetime | None = None) -> str:
        """Local time with millisecond precision, e.g. ``19/10/2026 14:03:07.042``."""
        now = now or datetime.now()
        return f"{now.strftime(cls.TIMESTAMP_FORMAT)}.{now.microsecond // 1000:03d}"

    @classmethod
    def format_tag(
        cls,
        level: LogLevel,
        *,
        suffix: str = "",
        color: bool = False,
        now: datetime | None = None,
    ) -> str:
        """Render ``[timestamp LEVEL<suffix>]: ``, optionally tinting the level part."""
        name = format_from_left(level_name(level), cls.LEVEL_WIDTH) + suffix
        if color:
            name = colorize(name, level)
        return f"[{cls.format_timestamp(now)} {name}]: "

    @classmethod
    def format_line(cls, message: str, level: LogLevel, *, now: datetime | None = None) -> str:
        """Plain, uncolored record as written to log files (no trailing newline)."""
        return cls.format_tag(level, now=now) + message
