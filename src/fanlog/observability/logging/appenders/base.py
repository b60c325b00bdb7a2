"""Observability – Appender base class.

An appender owns a severity threshold, a formatter and one delivery
action. ``deliver`` is the fault-isolation boundary: whatever goes wrong
inside formatting or I/O is converted into a :class:`DeliveryError`,
reported to the diagnostics channel, and signalled by returning ``False``.
"""
from __future__ import annotations

import abc
import threading

from fanlog.kernel.errors import DeliveryError
from fanlog.observability.logging.diagnostics import DiagnosticsChannel, StructlogDiagnostics
from fanlog.observability.logging.formatters import LineFormatter
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.protocol import Formatter, LogEvent


class Appender(abc.ABC):
    """Abstract log destination.

    Parameters
    ----------
    level:
        Minimum (inclusive) level this appender accepts.
    formatter:
        Shared, read-only formatter. Defaults to :meth:`default_formatter`.
    name:
        Identifier used in diagnostics. Defaults to the class name.
    diagnostics:
        Channel receiving contained failures. Defaults to stderr JSON lines.
    """

    def __init__(
        self,
        level: Level | str = Level.TRACE,
        formatter: Formatter | None = None,
        *,
        name: str | None = None,
        diagnostics: DiagnosticsChannel | None = None,
    ) -> None:
        self._level = Level.parse(level)
        self.formatter: Formatter = formatter or self.default_formatter()
        self.name = name or type(self).__name__
        self._diagnostics = diagnostics or StructlogDiagnostics()
        self._stats_lock = threading.Lock()
        self._delivered = 0
        self._failed = 0

    def default_formatter(self) -> Formatter:
        return LineFormatter()

    def threshold(self) -> Level:
        return self._level

    def set_level(self, level: Level | str) -> None:
        """Explicit reconfiguration of the threshold."""
        self._level = Level.parse(level)

    def accepts(self, level: Level) -> bool:
        return level >= self._level

    def deliver(self, event: LogEvent) -> bool:
        """Format and write *event*; return ``False`` on a contained failure."""
        try:
            text = self.formatter.format(event)
            self._write(text, event)
        except Exception as exc:  # noqa: BLE001
            self._record_failure(exc, event)
            return False
        with self._stats_lock:
            self._delivered += 1
        return True

    @abc.abstractmethod
    def _write(self, text: str, event: LogEvent) -> None:
        """Destination-specific I/O. May raise; :meth:`deliver` contains it."""

    def flush(self) -> None:
        """Push buffered output to the destination, if any."""

    def close(self) -> None:
        """Release resources held by the appender."""

    @property
    def diagnostics(self) -> DiagnosticsChannel:
        return self._diagnostics

    @property
    def delivered(self) -> int:
        return self._delivered

    @property
    def failed(self) -> int:
        return self._failed

    def _record_failure(self, exc: Exception, event: LogEvent | None) -> None:
        with self._stats_lock:
            self._failed += 1
        if isinstance(exc, DeliveryError):
            error = exc
        else:
            error = DeliveryError(self.name, f"{type(exc).__name__}: {exc}", cause=exc)
        try:
            self._diagnostics.report(self.name, error, event)
        except Exception:  # noqa: BLE001
            # a broken diagnostics channel must not break delivery either
            pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, level={self._level.name})"


__all__ = ["Appender"]
