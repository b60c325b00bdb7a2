"""Observability – log event fan-out: levels, events, formatters, dispatcher."""
from fanlog.observability.logging.levels import Level
from fanlog.observability.logging.protocol import Formatter, LogEvent
from fanlog.observability.logging.filters import SensitiveFieldsFilter
from fanlog.observability.logging.formatters import LineFormatter, RawFormatter, StructuredFormatter
from fanlog.observability.logging.diagnostics import DiagnosticsChannel, StructlogDiagnostics
from fanlog.observability.logging.appenders import (
    Appender,
    BackgroundAppender,
    ConsoleAppender,
    FileAppender,
    NotificationAppender,
    NotificationAppenderConfig,
    parse_recipients,
    truncate,
)
from fanlog.observability.logging.logger import Logger
from fanlog.observability.logging.dispatcher import Dispatcher

__all__ = [
    "Appender",
    "BackgroundAppender",
    "ConsoleAppender",
    "DiagnosticsChannel",
    "Dispatcher",
    "FileAppender",
    "Formatter",
    "Level",
    "LineFormatter",
    "LogEvent",
    "Logger",
    "NotificationAppender",
    "NotificationAppenderConfig",
    "RawFormatter",
    "SensitiveFieldsFilter",
    "StructlogDiagnostics",
    "StructuredFormatter",
    "parse_recipients",
    "truncate",
]
