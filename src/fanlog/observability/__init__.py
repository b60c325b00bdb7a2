"""Observability – correlation and structured log fan-out."""

from fanlog.observability.correlation import CorrelationContext, RequestContext
from fanlog.observability.logging import Dispatcher, Level, LogEvent, Logger

__all__ = [
    "CorrelationContext",
    "Dispatcher",
    "Level",
    "LogEvent",
    "Logger",
    "RequestContext",
]
