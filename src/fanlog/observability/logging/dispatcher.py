"""Observability – Dispatcher: fan-out of log events to registered appenders.

The appender collection is an immutable tuple replaced under a lock on
``register`` (copy-on-write). ``emit`` reads the current tuple once, so it
sees every appender fully constructed or not at all, and no lock is held
while appenders deliver.
"""
from __future__ import annotations

import threading
import traceback
from typing import Any, Mapping

from fanlog.kernel.errors import DeliveryError
from fanlog.kernel.time import Clock, SystemClock
from fanlog.observability.correlation import CorrelationContext
from fanlog.observability.logging.appenders.base import Appender
from fanlog.observability.logging.diagnostics import DiagnosticsChannel, StructlogDiagnostics
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.logger import Logger
from fanlog.observability.logging.protocol import LogEvent


def describe_exception(exc: BaseException | str | None) -> str | None:
    """Render an attached error as text for :attr:`LogEvent.exception`."""
    if exc is None or isinstance(exc, str):
        return exc
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()


class Dispatcher:
    """Process-wide fan-out point owning the ordered appender set.

    Construct one explicitly at startup and pass it (or its loggers) to the
    code that logs; tests construct their own.

    Parameters
    ----------
    clock:
        Source of event timestamps. Defaults to :class:`SystemClock`.
    diagnostics:
        Fallback channel for failures escaping an appender boundary.
    """

    def __init__(
        self,
        *,
        clock: Clock | None = None,
        diagnostics: DiagnosticsChannel | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self._diagnostics = diagnostics or StructlogDiagnostics()
        self._appenders: tuple[Appender, ...] = ()
        self._register_lock = threading.Lock()
        self._loggers: dict[str, Logger] = {}
        self._loggers_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def register(self, appender: Appender) -> Appender:
        """Add *appender*; it receives events emitted after this call returns."""
        with self._register_lock:
            self._appenders = (*self._appenders, appender)
        return appender

    @property
    def appenders(self) -> tuple[Appender, ...]:
        return self._appenders

    def logger(self, category: str) -> Logger:
        """Return the cached :class:`Logger` for *category*, creating it if absent."""
        handle = self._loggers.get(category)
        if handle is not None:
            return handle
        with self._loggers_lock:
            return self._loggers.setdefault(category, Logger(category, self))

    __getitem__ = logger

    # ------------------------------------------------------------------
    # Fan-out
    # ------------------------------------------------------------------

    def emit(
        self,
        category: str,
        level: Level | str,
        message: str,
        payload: Mapping[str, Any] | None = None,
        *,
        exc: BaseException | str | None = None,
    ) -> None:
        """Build one :class:`LogEvent` and deliver it to every accepting appender.

        Never raises because of a downstream failure.
        """
        try:
            event = self._build_event(category, level, message, payload, exc)
        except Exception as error:  # noqa: BLE001
            self._report("dispatcher", error, None)
            return

        for appender in self._appenders:
            try:
                if appender.accepts(event.level):
                    appender.deliver(event)
            except Exception as error:  # noqa: BLE001
                self._report(getattr(appender, "name", repr(appender)), error, event)

    def _build_event(
        self,
        category: str,
        level: Level | str,
        message: str,
        payload: Mapping[str, Any] | None,
        exc: BaseException | str | None,
    ) -> LogEvent:
        ctx = CorrelationContext.get()
        return LogEvent(
            level=Level.parse(level),
            message=str(message),
            logger_name=category,
            timestamp=self._clock.now(),
            monotonic=self._clock.monotonic(),
            payload=payload or {},
            exception=describe_exception(exc),
            thread_name=threading.current_thread().name,
            correlation_id=ctx.correlation_id if ctx is not None else None,
        )

    def _report(self, source: str, error: Exception, event: LogEvent | None) -> None:
        if not isinstance(error, DeliveryError):
            error = DeliveryError(source, f"{type(error).__name__}: {error}", cause=error)
        try:
            self._diagnostics.report(source, error, event)
        except Exception:  # noqa: BLE001
            pass

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self) -> None:
        for appender in self._appenders:
            try:
                appender.flush()
            except Exception as error:  # noqa: BLE001
                self._report(appender.name, error, None)

    def close(self) -> None:
        """Close every appender. Call once at process shutdown."""
        for appender in self._appenders:
            try:
                appender.close()
            except Exception as error:  # noqa: BLE001
                self._report(appender.name, error, None)


__all__ = ["Dispatcher", "describe_exception"]
