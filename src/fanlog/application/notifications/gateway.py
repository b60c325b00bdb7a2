"""Application notifications – messaging gateway port and in-memory fakes."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

__all__ = [
    "FailingGatewayClient",
    "GatewayClient",
    "InMemoryGatewayClient",
    "SentNotification",
    "SubmitResult",
]


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of one gateway submission."""

    success: bool
    reason: str | None = None
    message_id: str | None = None

    @classmethod
    def ok(cls, message_id: str | None = None) -> "SubmitResult":
        return cls(success=True, message_id=message_id)

    @classmethod
    def failure(cls, reason: str) -> "SubmitResult":
        return cls(success=False, reason=reason)


@runtime_checkable
class GatewayClient(Protocol):
    """Port: deliver one text notification to a list of recipients.

    Implementations must tolerate concurrent calls.
    """

    def submit(self, originator: str, recipients: Sequence[str], text: str) -> SubmitResult: ...


@dataclass(frozen=True)
class SentNotification:
    """A notification captured by :class:`InMemoryGatewayClient`."""

    originator: str
    recipients: tuple[str, ...]
    text: str


class InMemoryGatewayClient:
    """Fake GatewayClient that captures submissions in memory."""

    def __init__(self) -> None:
        self.sent: list[SentNotification] = []
        self._lock = threading.Lock()

    def submit(self, originator: str, recipients: Sequence[str], text: str) -> SubmitResult:
        with self._lock:
            self.sent.append(SentNotification(originator, tuple(recipients), text))
            return SubmitResult.ok(f"mem-msg-{len(self.sent)}")

    def reset(self) -> None:
        with self._lock:
            self.sent.clear()

    @property
    def count(self) -> int:
        return len(self.sent)

    def last(self) -> SentNotification | None:
        return self.sent[-1] if self.sent else None


class FailingGatewayClient:
    """Fake GatewayClient that rejects (or raises on) every submission."""

    def __init__(self, reason: str = "gateway unavailable", *, raise_error: bool = False) -> None:
        self._reason = reason
        self._raise = raise_error
        self.attempts = 0

    def submit(self, originator: str, recipients: Sequence[str], text: str) -> SubmitResult:  # noqa: ARG002
        self.attempts += 1
        if self._raise:
            raise RuntimeError(self._reason)
        return SubmitResult.failure(self._reason)
