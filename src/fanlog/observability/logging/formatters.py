"""Observability – formatters turning a :class:`LogEvent` into destination text.

Every formatter is a pure function of the event: no I/O and no mutable
state, so one instance can be shared by any number of appenders and
threads.
"""
from __future__ import annotations

import json
from typing import Any

from fanlog.observability.logging.filters import SensitiveFieldsFilter
from fanlog.observability.logging.protocol import LogEvent


class RawFormatter:
    """Unembellished message text, used for outbound notifications."""

    def format(self, event: LogEvent) -> str:
        return event.message


class LineFormatter:
    """Human-readable single line: ``<timestamp> <LEVEL> [<logger>] <message>``.

    An attached exception is appended on the following line(s).
    """

    def format(self, event: LogEvent) -> str:
        line = (
            f"{event.timestamp.isoformat(timespec='milliseconds')} "
            f"{event.level.name:<5} [{event.logger_name}] {event.message}"
        )
        if event.exception:
            line = f"{line}\n -- {event.exception}"
        return line


class StructuredFormatter:
    """One JSON object per event; payload keys in *sensitive_fields* are redacted."""

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._filter = SensitiveFieldsFilter(sensitive_fields)

    def format(self, event: LogEvent) -> str:
        record: dict[str, Any] = {
            "timestamp": event.timestamp.isoformat(),
            "level": event.level.name,
            "logger": event.logger_name,
            "message": event.message,
            "payload": self._filter.redact_deep(event.payload),
        }
        if event.exception:
            record["exception"] = event.exception
        if event.thread_name:
            record["thread"] = event.thread_name
        if event.correlation_id is not None:
            record["correlation_id"] = event.correlation_id
        return json.dumps(record, ensure_ascii=False, sort_keys=True, default=str)


__all__ = ["LineFormatter", "RawFormatter", "StructuredFormatter"]
