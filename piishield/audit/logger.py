"""Structured logging for piishield.

The default log sink: every call becomes one structured entry.  Entries
are printed to stderr (via rich) for humans, and optionally appended to a
JSON Lines file for machine consumption and log shipping.

This sink does no PII handling of its own — wrap it with
``piishield.audit.safe_logger.create_safe_logger`` for that.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any

from rich.console import Console

from piishield.config.schema import LoggingConfig, LogLevel

# All log output goes to stderr — stdout is reserved for CLI results
_console = Console(stderr=True)


class StructuredLogger:
    """Leveled logger writing structured entries to stderr and JSON Lines.

    Attributes:
        level: Entries below this level are dropped.
    """

    def __init__(
        self,
        level: LogLevel = LogLevel.INFO,
        log_path: Path | None = None,
        console: Console | None = _console,
    ) -> None:
        """Initialize the logger.

        Args:
            level: Minimum level to emit.
            log_path: Optional path to append JSON Lines entries to.
            console: Rich console for human-readable output, or None to
                     disable console output.
        """
        self.level = level
        self._console = console
        self._global_context: dict[str, Any] = {}
        self._log_file: IO[str] | None = None
        self._log_path = log_path
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            self._log_file = open(log_path, "a", encoding="utf-8")  # noqa: SIM115

    @classmethod
    def from_config(cls, config: LoggingConfig) -> StructuredLogger:
        return cls(
            level=config.level,
            log_path=config.log_file,
            console=_console if config.console else None,
        )

    def close(self) -> None:
        """Flush and close the log file if open."""
        if self._log_file is not None:
            self._log_file.flush()
            self._log_file.close()
            self._log_file = None

    def set_global_context(self, **context: Any) -> None:
        """Merge *context* into every subsequent entry."""
        self._global_context.update(context)

    def clear_global_context(self) -> None:
        self._global_context = {}

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.INFO, message, context)

    def warn(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._log(LogLevel.WARN, message, context)

    def error(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._log(LogLevel.ERROR, message, context, error)

    def _log(
        self,
        level: LogLevel,
        message: str,
        context: dict[str, Any] | None,
        error: BaseException | None = None,
    ) -> None:
        if level.priority < self.level.priority:
            return

        entry: dict[str, Any] = {
            "timestamp": _now_iso(),
            "level": level.value,
            "message": message,
            **self._global_context,
        }
        if context:
            entry["context"] = context
        if error is not None:
            entry["error"] = {"type": type(error).__name__, "message": str(error)}
        self._write_entry(entry)

        if self._console is not None:
            style = _level_style(level)
            self._console.print(
                f"  [{style}]{level.value.upper():5s}[/{style}] {message}",
                highlight=False,
            )
            if error is not None:
                self._console.print(
                    f"    [dim]{type(error).__name__}: {error}[/dim]",
                    highlight=False,
                )

    def _write_entry(self, entry: dict[str, Any]) -> None:
        """Write a structured JSON entry to the log file.

        If the write fails (disk full, permission error, etc.), reports the
        failure to stderr and keeps going without the file — a logging
        problem must not take the caller down.

        Args:
            entry: The log entry as a dictionary.
        """
        if self._log_file is not None:
            try:
                self._log_file.write(json.dumps(entry, default=str) + "\n")
                self._log_file.flush()
            except (OSError, ValueError) as e:
                # OSError: disk full, permission denied, etc.
                # ValueError: I/O operation on closed file
                _console.print(
                    f"[bold red]Log write failed:[/bold red] {e}",
                    highlight=False,
                )
                try:
                    self._log_file.close()
                except (OSError, ValueError):
                    pass
                self._log_file = None


_default_sink: StructuredLogger | None = None


def get_default_sink() -> StructuredLogger:
    """Return the process-wide default sink, creating it on first use."""
    global _default_sink
    if _default_sink is None:
        _default_sink = StructuredLogger()
    return _default_sink


def _now_iso() -> str:
    """Return the current UTC timestamp in ISO 8601 format."""
    return datetime.now(timezone.utc).isoformat()


def _level_style(level: LogLevel) -> str:
    """Map a log level to a rich style for console output."""
    styles = {
        LogLevel.DEBUG: "dim",
        LogLevel.INFO: "#5eead4",
        LogLevel.WARN: "#ffcc00",
        LogLevel.ERROR: "bold red",
    }
    return styles.get(level, "white")
