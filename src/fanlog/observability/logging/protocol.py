"""Observability – LogEvent record and Formatter protocol."""
from __future__ import annotations

import dataclasses
from datetime import datetime
from types import MappingProxyType
from typing import Any, Mapping, Protocol, runtime_checkable

from fanlog.observability.logging.levels import Level

_EMPTY: Mapping[str, Any] = MappingProxyType({})


def freeze(value: Any) -> Any:
    """Return a read-only deep copy: mappings become ``MappingProxyType``,
    lists and tuples become tuples, sets become frozensets."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(freeze(v) for v in value)
    return value


@dataclasses.dataclass(frozen=True)
class LogEvent:
    """Immutable log record produced at a call site.

    ``payload`` is deep-copied into read-only containers on construction
    (nested mappings included) so no appender can alter what later
    appenders see. Other mutable objects inside it are kept by reference.
    """

    level: Level
    message: str
    logger_name: str
    timestamp: datetime
    monotonic: float
    payload: Mapping[str, Any] = dataclasses.field(default_factory=lambda: _EMPTY)
    exception: str | None = None
    thread_name: str = ""
    correlation_id: str | None = None

    def __post_init__(self) -> None:
        if self.payload is not _EMPTY:
            object.__setattr__(self, "payload", freeze(self.payload))


@runtime_checkable
class Formatter(Protocol):
    """Port: pure transformation of a :class:`LogEvent` into text."""

    def format(self, event: LogEvent) -> str: ...


__all__ = ["Formatter", "LogEvent", "freeze"]
