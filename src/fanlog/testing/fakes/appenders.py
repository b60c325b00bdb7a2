"""Testing fakes – appenders and diagnostics that record what they receive."""
from __future__ import annotations

import threading
from typing import Any

from fanlog.observability.logging.appenders.base import Appender
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.protocol import LogEvent


class InMemoryDiagnostics:
    """DiagnosticsChannel that keeps every report in memory."""

    def __init__(self) -> None:
        self.reports: list[tuple[str, BaseException, LogEvent | None]] = []
        self._lock = threading.Lock()

    def report(self, source: str, error: BaseException, event: LogEvent | None = None) -> None:
        with self._lock:
            self.reports.append((source, error, event))

    @property
    def count(self) -> int:
        return len(self.reports)

    @property
    def sources(self) -> list[str]:
        return [source for source, _, _ in self.reports]


class RecordingAppender(Appender):
    """Appender that stores the formatted text and event of each delivery."""

    def __init__(self, level: Level | str = Level.TRACE, **kwargs: Any) -> None:
        kwargs.setdefault("diagnostics", InMemoryDiagnostics())
        super().__init__(level, **kwargs)
        self.events: list[LogEvent] = []
        self.lines: list[str] = []
        self._lock = threading.Lock()

    def _write(self, text: str, event: LogEvent) -> None:
        with self._lock:
            self.lines.append(text)
            self.events.append(event)

    @property
    def count(self) -> int:
        return len(self.events)


class ExplodingAppender(Appender):
    """Appender whose I/O always raises *error*."""

    def __init__(
        self,
        level: Level | str = Level.TRACE,
        error: Exception | None = None,
        **kwargs: Any,
    ) -> None:
        kwargs.setdefault("diagnostics", InMemoryDiagnostics())
        super().__init__(level, **kwargs)
        self._error = error or OSError("disk on fire")
        self.attempts = 0

    def _write(self, text: str, event: LogEvent) -> None:  # noqa: ARG002
        self.attempts += 1
        raise self._error


__all__ = ["ExplodingAppender", "InMemoryDiagnostics", "RecordingAppender"]
