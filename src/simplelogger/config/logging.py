"""
Logging Configuration.

These knobs are resolved before the engine runs: the helper functions in
``simplelogger.helpers`` consult them on every call, and ``configure_logging``
uses them to build sinks. The dispatcher and sinks never read them directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..levels import LogLevel
from ..sinks import FileMode

KNOWN_SINKS = ("console", "simple_console", "file")


class LoggingSettings(BaseSettings):
    """SimpleLogger configuration, read from ``SL_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    min_level: LogLevel = Field(default=LogLevel.DEBUG, description="Lowest level the log_* helpers emit")
    debug: bool = Field(default=True, description="Enable log_debug and log_assert")
    sinks: str = Field(default="console", description="Comma-separated sink names (console, simple_console, file)")
    console_color: bool = Field(default=False, description="Tint the console level tag")
    console_full_color: bool = Field(default=True, description="Tint whole console lines")
    console_min_level: LogLevel = Field(default=LogLevel.DEBUG, description="Console sink minimum level")
    file_path: str = Field(default="logs/simplelogger.log", description="Path for file sink")
    file_mode: FileMode = Field(default=FileMode.APPEND, description="append or overwrite")
    file_min_level: LogLevel = Field(default=LogLevel.INFO, description="File sink minimum level")

    @field_validator("min_level", "console_min_level", "file_min_level", mode="before")
    @classmethod
    def _parse_level(cls, value: Any) -> LogLevel:
        return LogLevel.parse(value)

    @field_validator("file_mode", mode="before")
    @classmethod
    def _parse_file_mode(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("sinks")
    @classmethod
    def _check_sinks(cls, value: str) -> str:
        unknown = [name for name in _split(value) if name not in KNOWN_SINKS]
        if unknown:
            raise ValueError(f"unknown sink(s): {', '.join(unknown)}")
        return value

    @property
    def sink_names(self) -> list[str]:
        return _split(self.sinks)


def _split(value: str) -> list[str]:
    return [part.strip().lower() for part in value.split(",") if part.strip()]
