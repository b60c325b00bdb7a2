"""Resilience – TimeoutPolicy."""
from __future__ import annotations

import concurrent.futures
import dataclasses
import threading
from typing import Callable, TypeVar

from fanlog.kernel.errors import TimeoutError as AppTimeoutError

T = TypeVar("T")


@dataclasses.dataclass
class TimeoutPolicy:
    """Run a blocking call on a worker thread and stop waiting after *timeout_seconds*.

    Each policy owns its worker pool, so calls stuck behind one policy never
    occupy the workers of another. The call itself cannot be interrupted; on
    timeout the caller is released with
    :class:`~fanlog.kernel.errors.TimeoutError` and the worker finishes in the
    background.
    """
    timeout_seconds: float
    max_workers: int = 4
    thread_name_prefix: str = "fanlog-timeout"
    _executor: concurrent.futures.ThreadPoolExecutor | None = dataclasses.field(
        default=None, init=False, repr=False, compare=False
    )
    _lock: threading.Lock = dataclasses.field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def _pool(self) -> concurrent.futures.ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = concurrent.futures.ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix=self.thread_name_prefix
                )
            return self._executor

    def execute(self, func: Callable[[], T]) -> T:
        future = self._pool().submit(func)
        try:
            return future.result(timeout=self.timeout_seconds)
        except concurrent.futures.TimeoutError as exc:
            future.cancel()
            raise AppTimeoutError(f"Operation timed out after {self.timeout_seconds}s") from exc

    def shutdown(self) -> None:
        """Release the worker pool without waiting for calls still running."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)


__all__ = ["TimeoutPolicy"]
