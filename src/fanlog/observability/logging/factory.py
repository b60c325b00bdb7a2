"""Observability – DispatcherFactory: wire the standard appender set from settings."""
from __future__ import annotations

import os
from typing import Sequence

from fanlog.adapters.messagebird import MessageBirdClient, MessageBirdConfig
from fanlog.application.notifications import GatewayClient
from fanlog.config.appenders import LoggingSettings, MessageBirdSettings
from fanlog.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    SettingsFactory,
    SettingsLoader,
)
from fanlog.observability.logging.appenders import (
    BackgroundAppender,
    ConsoleAppender,
    FileAppender,
    NotificationAppender,
    NotificationAppenderConfig,
)
from fanlog.observability.logging.diagnostics import DiagnosticsChannel, StructlogDiagnostics
from fanlog.observability.logging.dispatcher import Dispatcher


class DispatcherFactory:
    """Build a :class:`Dispatcher` with console, file and notification appenders.

    The notification appender is wrapped in a :class:`BackgroundAppender` so
    gateway latency never reaches the emitting thread.
    """

    @staticmethod
    def from_settings(
        settings: LoggingSettings,
        messagebird: MessageBirdSettings | None = None,
        *,
        gateway: GatewayClient | None = None,
        diagnostics: DiagnosticsChannel | None = None,
    ) -> Dispatcher:
        diagnostics = diagnostics or StructlogDiagnostics()
        dispatcher = Dispatcher(diagnostics=diagnostics)

        dispatcher.register(
            ConsoleAppender(settings.console_level, name="console", diagnostics=diagnostics)
        )
        if settings.file_path:
            dispatcher.register(
                FileAppender(
                    settings.file_path,
                    settings.file_level,
                    name="file",
                    diagnostics=diagnostics,
                )
            )
        if messagebird is not None:
            config = NotificationAppenderConfig(
                originator=messagebird.originator,
                recipients=messagebird.recipients,  # type: ignore[arg-type]
                level=messagebird.level,  # type: ignore[arg-type]
                timeout_seconds=messagebird.timeout_seconds,
            )
            client = gateway or MessageBirdClient(
                MessageBirdConfig.for_deadline(messagebird.api_key, messagebird.timeout_seconds)
            )
            notification = NotificationAppender(
                config,
                client,
                close_client=gateway is None,
                name="messagebird",
                diagnostics=diagnostics,
            )
            dispatcher.register(
                BackgroundAppender(notification, maxsize=settings.background_queue_size)
            )
        return dispatcher

    @staticmethod
    def from_env(
        env_file: str | None = ".env",
        *,
        diagnostics: DiagnosticsChannel | None = None,
    ) -> Dispatcher:
        """Load settings from *env_file* (if given) and the environment, then wire.

        The notification appender is only registered when ``MESSAGEBIRD_*``
        settings are present; incomplete ones raise
        :class:`~fanlog.config.validation.ConfigurationError`.
        """
        loaders: Sequence[SettingsLoader] = (
            [DotenvSettingsLoader(env_file)] if env_file else [EnvSettingsLoader()]
        )
        settings = SettingsFactory.create(LoggingSettings, loaders)
        messagebird = None
        if _has_prefixed_env(MessageBirdSettings._prefix):
            messagebird = SettingsFactory.create(MessageBirdSettings, loaders)
        return DispatcherFactory.from_settings(settings, messagebird, diagnostics=diagnostics)


def _has_prefixed_env(prefix: str) -> bool:
    return any(key.startswith(f"{prefix}_") for key in os.environ)


__all__ = ["DispatcherFactory"]
