"""Infrastructure errors – failures talking to files, streams and remote gateways."""

from __future__ import annotations

from typing import Any

from fanlog.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    default_code = "infrastructure_error"


class TimeoutError(InfrastructureError):  # noqa: A001
    """A blocking call did not finish within its deadline."""

    default_code = "infrastructure_timeout"


class ExternalServiceError(InfrastructureError):
    """A remote service failed or answered with a server error."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"{service} request failed", **kwargs)
        self.service = service
        self.status_code = status_code


class DeliveryError(InfrastructureError):
    """One appender could not deliver one event.

    Raised and caught inside the appender; it only ever reaches the
    diagnostics channel.
    """

    default_code = "delivery_error"

    def __init__(self, appender: str, message: str | None = None, **kwargs: Any) -> None:
        super().__init__(message or f"{appender} failed to deliver event", **kwargs)
        self.appender = appender

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "appender": self.appender}


__all__ = ["DeliveryError", "ExternalServiceError", "InfrastructureError", "TimeoutError"]
