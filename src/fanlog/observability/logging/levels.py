"""Observability – ordered severity levels."""
from __future__ import annotations

from enum import IntEnum


class Level(IntEnum):
    """Severity of a log event, ordered ``TRACE < ... < FATAL``."""

    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5

    @classmethod
    def parse(cls, value: "Level | str | int") -> "Level":
        """Coerce a level name (case-insensitive), number or member to :class:`Level`.

        ``"warning"`` and ``"critical"`` are accepted as aliases of
        ``WARN`` and ``FATAL``.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        normalized = str(value).strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {value!r}") from exc


_ALIASES = {
    "WARNING": "WARN",
    "CRITICAL": "FATAL",
}


__all__ = ["Level"]
