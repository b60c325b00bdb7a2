"""Observability – BackgroundAppender.

A non-blocking appender backed by :class:`queue.Queue`. Events are placed
in the queue without blocking the caller; a daemon worker thread drains
the queue in FIFO order and forwards events to a delegate appender.
"""
from __future__ import annotations

import queue
import threading
import time

from fanlog.kernel.errors import DeliveryError
from fanlog.observability.logging.appenders.base import Appender
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.protocol import LogEvent

_SENTINEL = None


class BackgroundAppender(Appender):
    """Queue events for *delegate* and deliver them on a worker thread.

    Typical usage::

        appender = BackgroundAppender(NotificationAppender(config, client))
        dispatcher.register(appender)

        # When shutting down:
        appender.close(timeout=5.0)

    Parameters
    ----------
    delegate:
        The appender that performs the actual I/O. Its threshold and name
        are used for filtering and diagnostics.
    maxsize:
        Maximum queue depth.  ``0`` means unlimited.  When the queue is full
        the event is dropped and reported, never waited for.

    ``delivered`` counts events accepted into the queue and ``failed`` counts
    events dropped here; the delegate's own counters track the writes.
    """

    def __init__(self, delegate: Appender, maxsize: int = 1000) -> None:
        super().__init__(
            delegate.threshold(),
            delegate.formatter,
            name=f"background:{delegate.name}",
            diagnostics=delegate.diagnostics,
        )
        self.delegate = delegate
        self._queue: queue.Queue[LogEvent | None] = queue.Queue(maxsize=maxsize)
        self._closed = False
        # _closed and every enqueue change together, so nothing lands behind the sentinel
        self._enqueue_lock = threading.Lock()
        self._worker = threading.Thread(
            target=self._drain, name=f"fanlog-{delegate.name}", daemon=True
        )
        self._worker.start()

    # ------------------------------------------------------------------
    # Appender interface
    # ------------------------------------------------------------------

    def threshold(self) -> Level:
        return self.delegate.threshold()

    def set_level(self, level: Level | str) -> None:
        self.delegate.set_level(level)

    def accepts(self, level: Level) -> bool:
        return self.delegate.accepts(level)

    def deliver(self, event: LogEvent) -> bool:
        """Enqueue *event* without blocking; ``False`` if it was dropped."""
        with self._enqueue_lock:
            if self._closed:
                reason = "Appender is closed"
            else:
                try:
                    self._queue.put_nowait(event)
                except queue.Full:
                    reason = "Queue full, event dropped"
                else:
                    reason = None
        if reason is not None:
            self._record_failure(DeliveryError(self.name, reason), event)
            return False
        with self._stats_lock:
            self._delivered += 1
        return True

    def _write(self, text: str, event: LogEvent) -> None:  # pragma: no cover
        raise NotImplementedError("BackgroundAppender delivers through its delegate")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def flush(self, timeout: float | None = 5.0) -> bool:
        """Wait until every queued event has been handed to the delegate.

        Returns ``False`` when *timeout* elapsed first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._queue.all_tasks_done:
            while self._queue.unfinished_tasks:
                remaining = _remaining(deadline)
                if remaining is not None and remaining <= 0:
                    return False
                self._queue.all_tasks_done.wait(remaining)
        self.delegate.flush()
        return True

    def close(self, timeout: float | None = 5.0) -> None:
        """Stop accepting events, drain the queue and close the delegate.

        Waits at most *timeout* seconds in total. Events still queued when
        the time is up are dropped and reported.
        """
        with self._enqueue_lock:
            if self._closed:
                return
            self._closed = True
        deadline = None if timeout is None else time.monotonic() + timeout
        try:
            self._queue.put(_SENTINEL, timeout=_remaining(deadline, floor=0.0))
        except queue.Full:
            self._discard_pending()
            self._queue.put_nowait(_SENTINEL)
        self._worker.join(_remaining(deadline, floor=0.0))
        self.delegate.close()

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def _discard_pending(self) -> None:
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                return
            try:
                if event is not _SENTINEL:
                    self._record_failure(
                        DeliveryError(self.name, "Closed before delivery, event dropped"), event
                    )
            finally:
                self._queue.task_done()

    def _drain(self) -> None:
        while True:
            event = self._queue.get()
            try:
                if event is _SENTINEL:
                    break
                self.delegate.deliver(event)
            except Exception as exc:  # noqa: BLE001
                self._record_failure(exc, event)
            finally:
                self._queue.task_done()


def _remaining(deadline: float | None, floor: float | None = None) -> float | None:
    if deadline is None:
        return None
    left = deadline - time.monotonic()
    return left if floor is None else max(left, floor)


__all__ = ["BackgroundAppender"]
