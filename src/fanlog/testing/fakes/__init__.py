"""Testing fakes – in-memory doubles for pipeline ports."""
from fanlog.application.notifications import FailingGatewayClient, InMemoryGatewayClient
from fanlog.kernel.time import FrozenClock
from fanlog.testing.fakes.appenders import ExplodingAppender, InMemoryDiagnostics, RecordingAppender
from fanlog.testing.fakes.clock import FakeClock

__all__ = [
    "ExplodingAppender",
    "FailingGatewayClient",
    "FakeClock",
    "FrozenClock",
    "InMemoryDiagnostics",
    "InMemoryGatewayClient",
    "RecordingAppender",
]
