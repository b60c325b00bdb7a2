"""Observability – appender variants sharing the threshold/accepts/deliver contract."""
from fanlog.observability.logging.appenders.background import BackgroundAppender
from fanlog.observability.logging.appenders.base import Appender
from fanlog.observability.logging.appenders.console import ConsoleAppender
from fanlog.observability.logging.appenders.file import FileAppender
from fanlog.observability.logging.appenders.notification import (
    NotificationAppender,
    NotificationAppenderConfig,
    parse_recipients,
    truncate,
)

__all__ = [
    "Appender",
    "BackgroundAppender",
    "ConsoleAppender",
    "FileAppender",
    "NotificationAppender",
    "NotificationAppenderConfig",
    "parse_recipients",
    "truncate",
]
