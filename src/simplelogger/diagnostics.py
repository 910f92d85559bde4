"""
Library-internal diagnostics.

SimpleLogger reports its own lifecycle events (files opened, hooks installed,
sinks rebuilt) through structlog bound to stdlib loggers in the ``simplelogger``
namespace. The package installs a ``NullHandler``, so nothing is printed unless
the host application configures stdlib logging.
"""

from __future__ import annotations

import logging

import structlog

LOGGER_NAMESPACE = "simplelogger"


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger for library-internal events."""
    return structlog.wrap_logger(
        logging.getLogger(name or LOGGER_NAMESPACE),
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.KeyValueRenderer(key_order=["event"], sort_keys=True),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def is_internal(logger_name: str) -> bool:
    """True for stdlib logger names owned by this package."""
    return logger_name == LOGGER_NAMESPACE or logger_name.startswith(LOGGER_NAMESPACE + ".")
