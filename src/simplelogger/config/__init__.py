"""
SimpleLogger Configuration Module.

Usage:
    from simplelogger import config

    config.settings.min_level  # LogLevel.DEBUG
    config.settings.sink_names  # ["console"]

Environment variables use the ``SL_`` prefix, e.g. ``SL_MIN_LEVEL=warning``,
``SL_DEBUG=false``, ``SL_SINKS=console,file``.
"""

from .logging import KNOWN_SINKS, LoggingSettings

# Singleton instance
settings = LoggingSettings()

__all__ = ["KNOWN_SINKS", "LoggingSettings", "settings"]
