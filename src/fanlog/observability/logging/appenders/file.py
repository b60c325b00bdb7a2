"""Observability – FileAppender.

Appends one formatted line per event. The file is opened and closed per
write and each line goes out in a single ``write`` call.
"""
from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from fanlog.config.validation import ConfigurationError
from fanlog.observability.logging.appenders.base import Appender
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.protocol import LogEvent


class FileAppender(Appender):
    """Append formatted lines to *file_name* (parent directories are created)."""

    def __init__(
        self,
        file_name: str | Path,
        level: Level | str = Level.TRACE,
        *,
        encoding: str = "utf-8",
        **kwargs: Any,
    ) -> None:
        if not str(file_name).strip():
            raise ConfigurationError("FileAppender requires a non-empty file_name")
        super().__init__(level, **kwargs)
        self.path = Path(file_name)
        self._encoding = encoding
        self._lock = threading.Lock()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _write(self, text: str, event: LogEvent) -> None:  # noqa: ARG002
        line = text + "\n"
        with self._lock:
            with self.path.open("a", encoding=self._encoding) as fh:
                fh.write(line)


__all__ = ["FileAppender"]
