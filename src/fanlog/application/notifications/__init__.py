"""Application notifications – gateway port + in-memory fakes."""
from fanlog.application.notifications.gateway import (
    FailingGatewayClient,
    GatewayClient,
    InMemoryGatewayClient,
    SentNotification,
    SubmitResult,
)

__all__ = [
    "FailingGatewayClient",
    "GatewayClient",
    "InMemoryGatewayClient",
    "SentNotification",
    "SubmitResult",
]
