"""Config – settings for the standard appender set.

Loaded from the environment (or a ``.env`` file)::

    FANLOG_CONSOLE_LEVEL=debug
    FANLOG_FILE_PATH=app.log
    FANLOG_FILE_LEVEL=info
    MESSAGEBIRD_API_KEY=...
    MESSAGEBIRD_ORIGINATOR=MyApp
    MESSAGEBIRD_RECIPIENTS=+31600000001,+31600000002
"""
from __future__ import annotations

import dataclasses

from fanlog.config.settings.base import Settings
from fanlog.config.validation import InvalidSettingValueError
from fanlog.observability.logging.levels import Level


def _check_level(name: str, value: str) -> None:
    try:
        Level.parse(value)
    except ValueError as exc:
        raise InvalidSettingValueError(name, value, str(exc)) from exc


@dataclasses.dataclass
class LoggingSettings(Settings):
    """Console and file appender settings. An empty ``file_path`` disables the file appender."""

    _prefix = "FANLOG"

    console_level: str = "debug"
    file_path: str = "app.log"
    file_level: str = "info"
    background_queue_size: int = 1000

    def _validate(self) -> None:
        _check_level("console_level", self.console_level)
        _check_level("file_level", self.file_level)
        if self.background_queue_size < 0:
            raise InvalidSettingValueError(
                "background_queue_size", self.background_queue_size, "must not be negative"
            )


@dataclasses.dataclass
class MessageBirdSettings(Settings):
    """Notification appender settings for the MessageBird gateway."""

    _prefix = "MESSAGEBIRD"

    api_key: str
    originator: str
    recipients: str
    level: str = "error"
    timeout_seconds: float = 10.0

    def _validate(self) -> None:
        for name in ("api_key", "originator", "recipients"):
            value = getattr(self, name)
            if not value or not str(value).strip():
                raise InvalidSettingValueError(name, value, "must not be empty")
        _check_level("level", self.level)
        if self.timeout_seconds <= 0:
            raise InvalidSettingValueError("timeout_seconds", self.timeout_seconds, "must be positive")


__all__ = ["LoggingSettings", "MessageBirdSettings"]
