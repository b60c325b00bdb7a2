"""Unit tests for DispatcherFactory wiring from settings and environment."""

from __future__ import annotations

from pathlib import Path

import pytest

from fanlog.config.appenders import LoggingSettings, MessageBirdSettings
from fanlog.config.validation import MissingRequiredSettingError
from fanlog.observability.logging import (
    BackgroundAppender,
    ConsoleAppender,
    FileAppender,
    Level,
    NotificationAppender,
)
from fanlog.observability.logging.factory import DispatcherFactory
from fanlog.testing.fakes import InMemoryDiagnostics, InMemoryGatewayClient

_ALL_VARS = (
    "FANLOG_CONSOLE_LEVEL",
    "FANLOG_FILE_PATH",
    "FANLOG_FILE_LEVEL",
    "FANLOG_BACKGROUND_QUEUE_SIZE",
    "MESSAGEBIRD_API_KEY",
    "MESSAGEBIRD_ORIGINATOR",
    "MESSAGEBIRD_RECIPIENTS",
    "MESSAGEBIRD_LEVEL",
    "MESSAGEBIRD_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ALL_VARS:
        monkeypatch.delenv(name, raising=False)


def _messagebird() -> MessageBirdSettings:
    return MessageBirdSettings(
        api_key="test_key",
        originator="TestApp",
        recipients="+31600000001,+31600000002",
    )


class TestFromSettings:
    def test_standard_appender_set(self, tmp_path: Path) -> None:
        settings = LoggingSettings(file_path=str(tmp_path / "app.log"))
        dispatcher = DispatcherFactory.from_settings(
            settings, _messagebird(), gateway=InMemoryGatewayClient(), diagnostics=InMemoryDiagnostics()
        )
        try:
            console, file_appender, background = dispatcher.appenders
            assert isinstance(console, ConsoleAppender)
            assert console.threshold() is Level.DEBUG
            assert isinstance(file_appender, FileAppender)
            assert file_appender.threshold() is Level.INFO
            assert isinstance(background, BackgroundAppender)
            assert isinstance(background.delegate, NotificationAppender)
            assert background.threshold() is Level.ERROR
            assert background.delegate.recipients == ("+31600000001", "+31600000002")
        finally:
            dispatcher.close()

    def test_without_file_or_notification(self) -> None:
        dispatcher = DispatcherFactory.from_settings(
            LoggingSettings(file_path=""), diagnostics=InMemoryDiagnostics()
        )
        assert [a.name for a in dispatcher.appenders] == ["console"]

    def test_error_is_delivered_to_gateway(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        gateway = InMemoryGatewayClient()
        log_file = tmp_path / "app.log"
        dispatcher = DispatcherFactory.from_settings(
            LoggingSettings(file_path=str(log_file)),
            _messagebird(),
            gateway=gateway,
            diagnostics=InMemoryDiagnostics(),
        )
        try:
            log = dispatcher.logger("TestApp")
            log.info("Info message")
            log.error("Error message")
            dispatcher.flush()
        finally:
            dispatcher.close()

        out = capsys.readouterr().out
        assert "Info message" in out
        assert "Error message" in out
        assert "Error message" in log_file.read_text()
        assert gateway.count == 1
        assert gateway.last().text == "Error message"  # type: ignore[union-attr]


class TestFromEnv:
    def test_console_and_file_only_without_messagebird_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FANLOG_FILE_PATH", str(tmp_path / "env.log"))
        monkeypatch.setenv("FANLOG_CONSOLE_LEVEL", "warn")
        dispatcher = DispatcherFactory.from_env(None, diagnostics=InMemoryDiagnostics())
        try:
            names = [a.name for a in dispatcher.appenders]
            assert names == ["console", "file"]
            assert dispatcher.appenders[0].threshold() is Level.WARN
        finally:
            dispatcher.close()

    def test_messagebird_env_registers_notification(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FANLOG_FILE_PATH", str(tmp_path / "env.log"))
        monkeypatch.setenv("MESSAGEBIRD_API_KEY", "test_key")
        monkeypatch.setenv("MESSAGEBIRD_ORIGINATOR", "TestApp")
        monkeypatch.setenv("MESSAGEBIRD_RECIPIENTS", "+31600000001")
        dispatcher = DispatcherFactory.from_env(None, diagnostics=InMemoryDiagnostics())
        try:
            assert [a.name for a in dispatcher.appenders] == [
                "console",
                "file",
                "background:messagebird",
            ]
        finally:
            dispatcher.close()

    def test_gateway_retries_fit_inside_appender_timeout(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FANLOG_FILE_PATH", "")
        monkeypatch.setenv("MESSAGEBIRD_API_KEY", "test_key")
        monkeypatch.setenv("MESSAGEBIRD_ORIGINATOR", "TestApp")
        monkeypatch.setenv("MESSAGEBIRD_RECIPIENTS", "+31600000001")
        monkeypatch.setenv("MESSAGEBIRD_TIMEOUT_SECONDS", "3")
        dispatcher = DispatcherFactory.from_env(None, diagnostics=InMemoryDiagnostics())
        try:
            background = dispatcher.appenders[-1]
            assert isinstance(background, BackgroundAppender)
            config = background.delegate.client.config
            assert config.max_attempts == 2
            assert config.retry_budget < 3.0
        finally:
            dispatcher.close()

    def test_incomplete_messagebird_env_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FANLOG_FILE_PATH", "")
        monkeypatch.setenv("MESSAGEBIRD_ORIGINATOR", "TestApp")
        with pytest.raises(MissingRequiredSettingError):
            DispatcherFactory.from_env(None, diagnostics=InMemoryDiagnostics())

    def test_reads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text(f"FANLOG_FILE_PATH={tmp_path / 'dotenv.log'}\nFANLOG_FILE_LEVEL=error\n")
        # undo what load_dotenv writes into os.environ
        monkeypatch.setenv("FANLOG_FILE_PATH", "")
        monkeypatch.delenv("FANLOG_FILE_PATH")
        monkeypatch.setenv("FANLOG_FILE_LEVEL", "")
        monkeypatch.delenv("FANLOG_FILE_LEVEL")
        dispatcher = DispatcherFactory.from_env(str(env_file), diagnostics=InMemoryDiagnostics())
        try:
            file_appender = dispatcher.appenders[1]
            assert isinstance(file_appender, FileAppender)
            assert file_appender.path == tmp_path / "dotenv.log"
            assert file_appender.threshold() is Level.ERROR
        finally:
            dispatcher.close()

