"""Safe logger — a logging facade that redacts context before it leaves.

Drop-in replacement for any object with ``info``/``warn``/``error``/``debug``
methods taking ``(message, context)``: the context dict is passed through
``redact_pii`` and then forwarded, once, to the same method of the wrapped
sink.  The message string is forwarded unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol

from piishield.audit.logger import StructuredLogger, get_default_sink
from piishield.config.schema import PIIShieldConfig
from piishield.sanitize.engine import redact_pii


class LogSink(Protocol):
    """The logging interface the safe logger wraps and exposes."""

    def info(self, message: str, context: dict[str, Any] | None = None) -> None: ...

    def warn(self, message: str, context: dict[str, Any] | None = None) -> None: ...

    def error(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> None: ...

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None: ...


class SafeLogger:
    """Redacts log context, then delegates to a sink.

    Holds no mutable state; any number of instances may share one sink.
    Errors raised by the sink propagate to the caller unchanged.
    """

    def __init__(self, sink: LogSink, config: PIIShieldConfig | None = None) -> None:
        self._sink = sink
        self._config = config

    @property
    def sink(self) -> LogSink:
        return self._sink

    def _redact(self, context: dict[str, Any] | None) -> dict[str, Any] | None:
        if context is None:
            return None
        return redact_pii(context, self._config)

    def info(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._sink.info(message, self._redact(context))

    def warn(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._sink.warn(message, self._redact(context))

    def error(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        error: BaseException | None = None,
    ) -> None:
        self._sink.error(message, self._redact(context), error)

    def debug(self, message: str, context: dict[str, Any] | None = None) -> None:
        self._sink.debug(message, self._redact(context))


def create_safe_logger(
    sink: LogSink | None = None,
    config: PIIShieldConfig | None = None,
) -> SafeLogger:
    """Create a safe logger.

    Args:
        sink: The logger to wrap.  ``None`` builds a ``StructuredLogger``
              from ``config.logging``, or uses the process default sink
              when no config is given either.
        config: Redaction rules and limits.  ``None`` uses the builtins.

    Returns:
        A ``SafeLogger`` exposing ``info``, ``warn``, ``error`` and ``debug``.
    """
    if sink is None:
        sink = get_default_sink() if config is None else StructuredLogger.from_config(config.logging)
    return SafeLogger(sink, config)


safe_log = create_safe_logger()
