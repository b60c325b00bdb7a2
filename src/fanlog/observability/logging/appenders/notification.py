"""Observability – NotificationAppender.

Forwards severe events as short text notifications through a
:class:`~fanlog.application.notifications.GatewayClient`:

1. format with the bound formatter (raw message text by default),
2. truncate to ``max_length`` characters plus ``marker`` when longer,
3. submit once to every recipient, bounded by ``timeout_seconds`` and run on
   a worker pool owned by this appender.

A rejected submission, a raised exception or a timeout is a
:class:`~fanlog.kernel.errors.DeliveryError` contained by
:meth:`Appender.deliver`. There is no inline retry here; bounded retries
belong to the gateway client.
"""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence

from fanlog.application.notifications import GatewayClient
from fanlog.config.validation import ConfigurationError, InvalidSettingValueError
from fanlog.kernel.errors import DeliveryError
from fanlog.observability.logging.appenders.base import Appender
from fanlog.observability.logging.formatters import RawFormatter
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.protocol import Formatter, LogEvent
from fanlog.resilience.timeouts import TimeoutPolicy

MAX_LENGTH = 140
MARKER = "..."


def parse_recipients(value: str | Sequence[str]) -> tuple[str, ...]:
    """Split a comma-delimited recipient list, dropping blank segments.

    >>> parse_recipients("a@x, b@x,,c@x")
    ('a@x', 'b@x', 'c@x')
    """
    parts = value.split(",") if isinstance(value, str) else value
    return tuple(p.strip() for p in parts if p and p.strip())


def truncate(text: str, max_length: int = MAX_LENGTH, marker: str = MARKER) -> str:
    """Return *text* unchanged if it fits, else its first *max_length* chars plus *marker*."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker


@dataclasses.dataclass(frozen=True)
class NotificationAppenderConfig:
    """Validated configuration for :class:`NotificationAppender`.

    *recipients* also accepts the comma-delimited string form.
    """

    originator: str
    recipients: tuple[str, ...]
    level: Level = Level.ERROR
    max_length: int = MAX_LENGTH
    marker: str = MARKER
    timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "recipients", parse_recipients(self.recipients))
        try:
            object.__setattr__(self, "level", Level.parse(self.level))
        except ValueError as exc:
            raise InvalidSettingValueError("level", self.level, str(exc)) from exc
        if not self.originator or not self.originator.strip():
            raise ConfigurationError("NotificationAppender requires an originator")
        if not self.recipients:
            raise ConfigurationError("NotificationAppender requires at least one recipient")
        if self.max_length < 1:
            raise InvalidSettingValueError("max_length", self.max_length, "must be positive")
        if self.timeout_seconds <= 0:
            raise InvalidSettingValueError("timeout_seconds", self.timeout_seconds, "must be positive")


class NotificationAppender(Appender):
    """Sends error-and-above events to recipients through a messaging gateway."""

    def __init__(
        self,
        config: NotificationAppenderConfig,
        client: GatewayClient,
        formatter: Formatter | None = None,
        *,
        close_client: bool = False,
        **kwargs: Any,
    ) -> None:
        if client is None:
            raise ConfigurationError("NotificationAppender requires a gateway client")
        kwargs.setdefault("name", "notification")
        super().__init__(config.level, formatter, **kwargs)
        self.config = config
        self._client = client
        self._close_client = close_client
        self._timeout = TimeoutPolicy(
            config.timeout_seconds, max_workers=2, thread_name_prefix=f"fanlog-{self.name}"
        )

    @property
    def client(self) -> GatewayClient:
        return self._client

    @property
    def recipients(self) -> tuple[str, ...]:
        return self.config.recipients

    def default_formatter(self) -> Formatter:
        return RawFormatter()

    def _write(self, text: str, event: LogEvent) -> None:  # noqa: ARG002
        body = truncate(text, self.config.max_length, self.config.marker)
        result = self._timeout.execute(
            lambda: self._client.submit(self.config.originator, self.config.recipients, body)
        )
        if not result.success:
            raise DeliveryError(self.name, f"Gateway rejected notification: {result.reason}")

    def close(self) -> None:
        """Release the submit workers, and the gateway client when this appender owns it."""
        self._timeout.shutdown()
        if self._close_client:
            close = getattr(self._client, "close", None)
            if close is not None:
                close()


__all__ = [
    "MARKER",
    "MAX_LENGTH",
    "NotificationAppender",
    "NotificationAppenderConfig",
    "parse_recipients",
    "truncate",
]
