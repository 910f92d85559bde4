"""
SimpleLogger: leveled text logging to multiple sinks.

Provides a dispatcher that fans each message out to an ordered set of sinks:
- ConsoleSink: colored console output that collapses repeated messages
- SimpleConsoleSink: plain console output, one line per message
- FileSink: plain lines appended to (or overwriting) a file

Every sink has its own inclusive level range, applied after the dispatcher's.

Usage:
    from simplelogger import LogLevel, get_global_logger

    get_global_logger().log("Started", LogLevel.INFO)
"""

import logging

from ._version import __version__
from .core import capture_exceptions, configure_logging, get_global_logger, release_exceptions
from .dispatcher import SimpleLogger
from .exceptions import LogException
from .levels import LEVEL_NAME_WIDTH, LogLevel, is_included, level_name
from .sinks import BaseSink, ColorMode, ConsoleSink, FileMode, FileSink, SimpleConsoleSink

logging.getLogger("simplelogger").addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "BaseSink",
    "ColorMode",
    "ConsoleSink",
    "FileMode",
    "FileSink",
    "LEVEL_NAME_WIDTH",
    "LogException",
    "LogLevel",
    "SimpleConsoleSink",
    "SimpleLogger",
    "capture_exceptions",
    "configure_logging",
    "get_global_logger",
    "is_included",
    "level_name",
    "release_exceptions",
]
