"""Structured logging for the resultant package."""

from .logger import (
    BoundLogger,
    ConsoleRenderer,
    JsonDict,
    JsonRenderer,
    JsonValue,
    LogEntry,
    LogRenderer,
    NoOpRenderer,
    configure_from_settings,
    configure_logging,
    get_logger,
)

__all__ = [
    "BoundLogger",
    "ConsoleRenderer",
    "JsonDict",
    "JsonRenderer",
    "JsonValue",
    "LogEntry",
    "LogRenderer",
    "NoOpRenderer",
    "configure_from_settings",
    "configure_logging",
    "get_logger",
]
