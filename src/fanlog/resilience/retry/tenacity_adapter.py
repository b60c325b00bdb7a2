"""Resilience – bounded retry backed by tenacity."""
from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

import tenacity

T = TypeVar("T")
logger = logging.getLogger(__name__)


class TenacityRetryPolicy:
    """Call a function up to *max_attempts* times.

    *wait* and *retry* take tenacity strategies and default to a fixed
    200 ms pause and "retry on any exception". Once attempts run out the last
    exception is re-raised unchanged (``reraise=True``), so callers handle
    the same errors they would without a retry policy.

    ::

        policy = TenacityRetryPolicy(
            max_attempts=2,
            wait=tenacity.wait_exponential(multiplier=0.2, max=2.0),
            retry=tenacity.retry_if_exception_type(ExternalServiceError),
        )
        response = policy.execute(lambda: client.post("/messages", json=body))
    """

    def __init__(
        self,
        max_attempts: int = 3,
        wait: Any = None,
        retry: Any = None,
        reraise: bool = True,
        **retrying_kwargs: Any,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.max_attempts = max_attempts
        self.wait = wait if wait is not None else tenacity.wait_fixed(0.2)
        self.retry = retry if retry is not None else tenacity.retry_if_exception_type(Exception)
        self.reraise = reraise
        self._retrying_kwargs = retrying_kwargs

    def execute(self, func: Callable[[], T]) -> T:
        retrying = tenacity.Retrying(
            stop=tenacity.stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=self.retry,
            reraise=self.reraise,
            before_sleep=_log_before_sleep,
            **self._retrying_kwargs,
        )
        return retrying(func)


def _log_before_sleep(state: tenacity.RetryCallState) -> None:
    error = state.outcome.exception() if state.outcome is not None else None
    logger.debug("attempt %d failed, retrying: %r", state.attempt_number, error)


__all__ = ["TenacityRetryPolicy"]
