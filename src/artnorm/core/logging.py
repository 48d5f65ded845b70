"""stderr logging for artnorm.

stdout carries only normalized documents, so every diagnostic, warning and
progress line is written to stderr, either as plain text or as one JSON
object per line.
"""

import json
import sys
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

LogLevel = Literal["debug", "info", "warning", "error"]
LogFormat = Literal["text", "json"]


@dataclass
class LogSettings:
    verbose: bool = False
    quiet: bool = False
    format: LogFormat = "text"


_settings = LogSettings()


def set_verbose(verbose: bool) -> None:
    """Enable debug messages."""
    _settings.verbose = verbose


def configure_logging(log_format: LogFormat = "text", quiet: bool = False) -> None:
    """Choose the stderr format and whether info and progress lines are shown.

    Warnings and errors are written even in quiet mode.
    """
    _settings.format = log_format
    _settings.quiet = quiet


def _enabled(level: LogLevel) -> bool:
    if level == "debug":
        return _settings.verbose and not _settings.quiet
    if level == "info":
        return not _settings.quiet
    return True


def _write(line: str, end: str = "\n") -> None:
    print(line, end=end, file=sys.stderr)


def log(message: str, level: LogLevel = "info", **context: Any) -> None:
    """Write one log message to stderr.

    Args:
        message: Log message
        level: Log level
        **context: Key/value pairs attached to the message
    """
    if not _enabled(level):
        return

    if _settings.format == "json":
        entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            **context,
        }
        _write(json.dumps(entry, default=str))
        return

    if context:
        message += " (" + " ".join(f"{key}={value}" for key, value in context.items()) + ")"
    _write(message if level == "info" else f"[{level.upper()}] {message}")


def debug(message: str, **context: Any) -> None:
    log(message, level="debug", **context)


def info(message: str, **context: Any) -> None:
    log(message, level="info", **context)


def warning(message: str, **context: Any) -> None:
    log(message, level="warning", **context)


def error(message: str, **context: Any) -> None:
    log(message, level="error", **context)


class ProgressReporter:
    """Counts records read and documents emitted, and reports them on stderr.

    Text output rewrites a single status line at most ten times a second;
    JSON output emits a `progress` object per refresh and a `complete`
    object at the end.
    """

    refresh_interval = 0.1

    def __init__(self, description: str = "Normalizing", unit: str = "records"):
        self.description = description
        self.unit = unit
        self.current = 0
        self.emitted = 0
        self.started = time.perf_counter()
        self._refreshed = 0.0

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def update(self, amount: int = 1, emitted: int = 0) -> None:
        """Count processed input records and the documents they produced."""
        self.current += amount
        self.emitted += emitted

        if _settings.quiet:
            return
        now = time.perf_counter()
        if now - self._refreshed < self.refresh_interval:
            return
        self._refreshed = now

        rate = self.current / self.elapsed if self.elapsed > 0 else 0.0
        if _settings.format == "json":
            self._emit("progress", current=self.current, rate=round(rate, 1))
        else:
            _write(
                f"\r{self.description}: {self.current} {self.unit} ({rate:.1f} {self.unit}/s)",
                end="",
            )

    def finish(self) -> None:
        """Report the totals."""
        if _settings.quiet:
            return

        if _settings.format == "json":
            self._emit("complete", total=self.current, duration_seconds=round(self.elapsed, 2))
        else:
            _write(
                f"\n{self.description}: Complete - {self.current} {self.unit}, "
                f"{self.emitted} documents in {format_duration(self.elapsed)}"
            )

    def _emit(self, kind: str, **fields: Any) -> None:
        body = {"description": self.description, "unit": self.unit, "emitted": self.emitted}
        _write(json.dumps({kind: {**body, **fields}}))


def format_duration(seconds: float) -> str:
    """Short human-readable duration (`4.2s`, `3m 12s`, `1h 5m`)."""
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(int(seconds), 60)
    if minutes < 60:
        return f"{minutes}m {secs}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes}m"
