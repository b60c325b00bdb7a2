"""Observability – ConsoleAppender."""
from __future__ import annotations

import sys
import threading
from typing import Any, TextIO

from fanlog.observability.logging.appenders.base import Appender
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.protocol import LogEvent


class ConsoleAppender(Appender):
    """Writes one formatted line per event to *stream* (default ``sys.stdout``)."""

    def __init__(
        self,
        level: Level | str = Level.TRACE,
        stream: TextIO | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(level, **kwargs)
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        # resolved lazily so a test capturing sys.stdout sees our output
        return self._stream or sys.stdout

    def _write(self, text: str, event: LogEvent) -> None:  # noqa: ARG002
        with self._lock:
            stream = self.stream
            stream.write(text + "\n")
            stream.flush()

    def flush(self) -> None:
        with self._lock:
            self.stream.flush()


__all__ = ["ConsoleAppender"]
