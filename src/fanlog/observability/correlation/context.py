"""Observability – correlation id carried across log calls of one request."""
from __future__ import annotations

import contextlib
import dataclasses
from contextvars import ContextVar
from typing import Iterator, Mapping
from uuid import uuid4

_HEADER_NAMES = ("x-correlation-id", "x-request-id")


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Identifiers of the unit of work currently being logged about."""

    correlation_id: str

    @classmethod
    def new(cls) -> "RequestContext":
        return cls(str(uuid4()))


_current: ContextVar[RequestContext | None] = ContextVar("fanlog_request_context", default=None)


class CorrelationContext:
    """Holds the active :class:`RequestContext` for the current thread or task.

    :class:`~fanlog.observability.logging.Dispatcher` copies its
    ``correlation_id`` onto every event it builds.
    """

    @staticmethod
    def get() -> RequestContext | None:
        return _current.get()

    @staticmethod
    def set(ctx: RequestContext) -> None:
        _current.set(ctx)

    @staticmethod
    def clear() -> None:
        _current.set(None)

    @staticmethod
    @contextlib.contextmanager
    def scope(ctx: RequestContext) -> Iterator[RequestContext]:
        """Activate *ctx* for the ``with`` block, restoring the previous context after."""
        token = _current.set(ctx)
        try:
            yield ctx
        finally:
            _current.reset(token)

    @staticmethod
    def set_from_headers(headers: Mapping[str, str]) -> RequestContext:
        """Activate a context whose id comes from request headers.

        ``X-Correlation-ID`` is preferred over ``X-Request-ID`` (names are
        case-insensitive); a fresh UUID is used when neither is sent.
        """
        lowered = {name.lower(): value for name, value in headers.items()}
        found = next((lowered[h] for h in _HEADER_NAMES if lowered.get(h)), None)
        ctx = RequestContext(found or str(uuid4()))
        _current.set(ctx)
        return ctx


__all__ = ["CorrelationContext", "RequestContext"]
