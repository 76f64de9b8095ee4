"""Structured logging with bound context.

The package logs very little: contract violations are reported here
just before they are raised. Applications can point the output at their
own stream, switch to JSON lines, or silence it entirely.

Quick Start:
    >>> from resultant.observability import configure_logging, get_logger
    >>>
    >>> configure_logging(format="json", level="INFO")
    >>> log = get_logger("orders", request_id="abc")
    >>> log.info("order rejected", reason="out of stock")
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, Union, runtime_checkable

if TYPE_CHECKING:
    from resultant.config import ResultantSettings

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True, frozen=True)
class BoundLogger:
    """Structured logger with bound context. Immutable - bind() returns a new logger.

    Example:
        >>> log = BoundLogger(context={"logger": "resultant"})
        >>> log.warning("contract violation", code="WRONG_VARIANT")
        # => 10:30:45.123 [warning] contract violation code="WRONG_VARIANT" logger="resultant"
    """

    context: JsonDict = field(default_factory=dict)
    renderer: LogRenderer | None = None
    level: int | None = None

    def bind(self, **kw: JsonValue) -> BoundLogger:
        """Create new logger with additional bound context."""
        return BoundLogger(context={**self.context, **kw}, renderer=self.renderer, level=self.level)

    def unbind(self, *keys: str) -> BoundLogger:
        """Create new logger without specified keys."""
        return BoundLogger(context={k: v for k, v in self.context.items() if k not in keys},
                           renderer=self.renderer, level=self.level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= (self.level if self.level is not None else _effective_level())

    def _log(self, level: int, event: str, **kw: JsonValue) -> None:
        if not self.is_enabled_for(level):
            return
        entry = LogEntry(time.time(), _level_name(level), event, {**self.context, **kw})
        (self.renderer or _get_renderer()).render(entry)

    def debug(self, event: str, **kw: JsonValue) -> None: self._log(logging.DEBUG, event, **kw)
    def info(self, event: str, **kw: JsonValue) -> None: self._log(logging.INFO, event, **kw)
    def warning(self, event: str, **kw: JsonValue) -> None: self._log(logging.WARNING, event, **kw)
    def error(self, event: str, **kw: JsonValue) -> None: self._log(logging.ERROR, event, **kw)


@dataclass(slots=True, frozen=True)
class LogEntry:
    """Immutable log entry with all context."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def ts_iso(self) -> str:
        """ISO formatted timestamp."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).isoformat()

    @property
    def ts_human(self) -> str:
        """Human-readable timestamp (HH:MM:SS.mmm)."""
        return datetime.fromtimestamp(self.timestamp, tz=UTC).strftime("%H:%M:%S.%f")[:-3]


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Protocol for log output renderers."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """Human-readable console output. Format: timestamp [level] event key=value ..."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = auto-detect
    show_timestamp: bool = True

    def __post_init__(self) -> None:
        if self.colors is None:
            self.colors = getattr(self.output, "isatty", lambda: False)()

    def render(self, entry: LogEntry) -> None:
        c = _COLORS if self.colors else _NO_COLORS
        level_color = c[_LEVEL_COLORS.get(entry.level, "dim")]
        parts = [f"{c['dim']}{entry.ts_human}{c['reset']}"] if self.show_timestamp else []
        parts += [f"{level_color}[{entry.level}]{c['reset']}", f"{c['bold']}{entry.event}{c['reset']}"]
        parts += [f"{c['cyan']}{k}{c['reset']}={_format_value(v, c)}" for k, v in sorted(entry.context.items())]
        print(" ".join(parts), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """JSON Lines output for log aggregation."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        line = orjson.dumps({"timestamp": entry.ts_iso, "level": entry.level, "event": entry.event,
                             **entry.context}, option=orjson.OPT_NON_STR_KEYS, default=repr)
        print(line.decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Silent renderer for testing."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Global Configuration
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class _ProcessConfig:
    """Process-wide logging setup, visible from every thread."""

    renderer: LogRenderer | None = None
    level: int = logging.WARNING


_process = _ProcessConfig()
_process_lock = threading.Lock()

# Optional per-context overrides, set with configure_logging(..., local=True)
_renderer_override: ContextVar[LogRenderer | None] = ContextVar("resultant_log_renderer", default=None)
_level_override: ContextVar[int | None] = ContextVar("resultant_log_level", default=None)


def configure_logging(
    format: str = "console",  # noqa: A002 - shadows builtin but matches stdlib
    level: str = "WARNING",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
    local: bool = False,
) -> LogRenderer:
    """Configure package logging. Format: "console" (human), "json" (machine), "none".

    Applies to the whole process unless ``local`` is set, in which case it
    only overrides the current thread / async context.
    """
    level_no = getattr(logging, level.upper(), logging.WARNING)
    match format:
        case "console": renderer: LogRenderer = ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": renderer = JsonRenderer(output=output or sys.stdout)
        case "none": renderer = NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")
    if local:
        _renderer_override.set(renderer)
        _level_override.set(level_no)
    else:
        with _process_lock:
            _process.renderer, _process.level = renderer, level_no
    return renderer


def configure_from_settings(settings: ResultantSettings, *, output: TextIO | None = None) -> LogRenderer:
    """Configure logging from a settings object (honours the debug override)."""
    return configure_logging(settings.logging.format, settings.effective_log_level, output=output)


def get_logger(name: str | None = None, **initial_context: JsonValue) -> BoundLogger:
    """Get a structured logger with optional initial context. Name is added to context as 'logger'."""
    ctx = {**initial_context, **({"logger": name} if name else {})}
    return BoundLogger(context=ctx)


def _effective_level() -> int:
    if (level := _level_override.get()) is not None:
        return level
    return _process.level


def _get_renderer() -> LogRenderer:
    """Get configured renderer or create the default console one."""
    if (renderer := _renderer_override.get()) is not None:
        return renderer
    with _process_lock:
        if _process.renderer is None:
            _process.renderer = ConsoleRenderer()
        return _process.renderer


_COLORS = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m",
           "green": "\033[32m", "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m", "white": "\033[37m"}
_NO_COLORS = {k: "" for k in _COLORS}
_LEVEL_COLORS = {"debug": "dim", "info": "green", "warning": "yellow", "error": "red", "critical": "red"}


def _level_name(level: int) -> str:
    """Convert logging level int to lowercase name."""
    return logging.getLevelName(level).lower()


def _format_value(v: object, c: dict[str, str]) -> str:
    """Format a value for console output."""
    match v:
        case None: return f'{c["dim"]}null{c["reset"]}'
        case str(): return f'{c["yellow"]}"{v}"{c["reset"]}'
        case bool(): return f'{c["blue"]}{str(v).lower()}{c["reset"]}'
        case int() | float(): return f'{c["blue"]}{v}{c["reset"]}'
        case dict(): return f'{c["dim"]}{{{len(v)} items}}{c["reset"]}'
        case list() | tuple(): return f'{c["dim"]}[{len(v)} items]{c["reset"]}'
        case _: return f'{c["white"]}{v!r}{c["reset"]}'
