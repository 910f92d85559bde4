"""
Log levels and the inclusive level gate.
"""

from __future__ import annotations

from enum import IntEnum


class LogLevel(IntEnum):
    NONE = -1  # Sentinel, never used as a message level
    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4

    @classmethod
    def parse(cls, value: LogLevel | int | str) -> LogLevel:
        """Resolve a level from a member, its integer value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name.lstrip("-").isdigit():
                return cls(int(name))
            if name == "CRITICAL":
                return cls.FATAL
            try:
                return cls[name]
            except KeyError:
                raise ValueError(f"Unknown log level: {value!r}") from None
        return cls(value)


LEVEL_NAME_WIDTH = len("WARNING")

_LEVEL_NAMES = {level: level.name for level in LogLevel}


def level_name(level: LogLevel) -> str:
    return _LEVEL_NAMES[level]


def format_from_left(name: str, width: int) -> str:
    """Right-justify ``name`` to ``width``; longer names are returned unchanged."""
    return name.rjust(width)


def is_included(level: LogLevel, min_level: LogLevel, max_level: LogLevel) -> bool:
    return min_level <= level <= max_level
