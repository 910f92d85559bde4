from __future__ import annotations

import io
import logging
import sys
import threading
import typing as t

import pytest
import structlog

from simplelogger import core
from simplelogger.interceptors import RedirectStdLibHandler
from simplelogger.levels import LogLevel
from simplelogger.sinks import BaseSink


class RecordingSink(BaseSink):
    """In-memory sink that keeps every accepted (message, level) pair."""

    def __init__(self, **kwargs: t.Any):
        super().__init__(**kwargs)
        self.records: list[tuple[str, LogLevel]] = []
        self.closed = False

    def log(self, message: str, level: LogLevel) -> None:
        if self.accepts(level):
            self.records.append((message, level))

    def close(self) -> None:
        self.closed = True


class TtyStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


@pytest.fixture
def make_sink() -> t.Callable[..., RecordingSink]:
    """Factory for RecordingSink instances."""
    return RecordingSink


@pytest.fixture
def streams() -> tuple[io.StringIO, io.StringIO]:
    """(stdout, stderr) pair of in-memory streams."""
    return io.StringIO(), io.StringIO()


@pytest.fixture
def tty_streams() -> tuple[TtyStringIO, TtyStringIO]:
    return TtyStringIO(), TtyStringIO()


@pytest.fixture(autouse=True)
def isolate_process_state(monkeypatch):
    """
    Give every test a fresh global logger and restore hooks it may touch.
    """
    monkeypatch.setattr(core, "_global_logger", None)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(threading, "excepthook", threading.excepthook)

    root_logger = logging.getLogger()
    level = root_logger.level

    yield

    for handler in list(root_logger.handlers):
        if isinstance(handler, RedirectStdLibHandler):
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)
    structlog.reset_defaults()
