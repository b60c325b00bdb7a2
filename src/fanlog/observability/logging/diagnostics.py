"""Observability – fallback diagnostics channel.

Contained delivery failures are reported here instead of through any
appender, so a broken destination can never hide its own failures.
"""
from __future__ import annotations

import sys
from typing import Any, Protocol, TextIO, runtime_checkable

import structlog

from fanlog.kernel.errors import BaseError
from fanlog.observability.logging.protocol import LogEvent


@runtime_checkable
class DiagnosticsChannel(Protocol):
    """Port: receives failures that were contained inside the pipeline."""

    def report(self, source: str, error: BaseException, event: LogEvent | None = None) -> None: ...


class StructlogDiagnostics:
    """Writes one JSON line per contained failure to *stream* (default stderr)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._log = structlog.wrap_logger(
            structlog.PrintLogger(stream or sys.stderr),
            processors=[
                structlog.processors.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                structlog.processors.format_exc_info,
                structlog.processors.JSONRenderer(default=str),
            ],
        ).bind(logger="fanlog.diagnostics")

    def report(self, source: str, error: BaseException, event: LogEvent | None = None) -> None:
        fields: dict[str, Any] = {"source": source}
        if isinstance(error, BaseError):
            fields["error"] = error.to_dict()
        else:
            fields["error"] = repr(error)
        if event is not None:
            fields["event_level"] = event.level.name
            fields["event_logger"] = event.logger_name
        self._log.error("log_delivery_failed", **fields)


__all__ = ["DiagnosticsChannel", "StructlogDiagnostics"]
