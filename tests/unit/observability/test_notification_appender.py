"""Unit tests for NotificationAppender, truncation and recipient parsing."""

from __future__ import annotations

import threading

import pytest

from fanlog.application.notifications import SubmitResult
from fanlog.config.validation import ConfigurationError, InvalidSettingValueError
from fanlog.kernel.errors import DeliveryError, TimeoutError as AppTimeoutError
from fanlog.observability.logging import (
    Level,
    LineFormatter,
    LogEvent,
    NotificationAppender,
    NotificationAppenderConfig,
    parse_recipients,
    truncate,
)
from fanlog.testing.fakes import (
    FailingGatewayClient,
    FakeClock,
    InMemoryDiagnostics,
    InMemoryGatewayClient,
)


def _event(message: str, level: Level = Level.ERROR) -> LogEvent:
    clock = FakeClock()
    return LogEvent(
        level=level,
        message=message,
        logger_name="TestApp",
        timestamp=clock.now(),
        monotonic=clock.monotonic(),
    )


def _config(**overrides) -> NotificationAppenderConfig:  # type: ignore[no-untyped-def]
    values = {"originator": "TestApp", "recipients": "+31600000001,+31600000002,+31600000003"}
    values.update(overrides)
    return NotificationAppenderConfig(**values)


class _HangingClient:
    def __init__(self) -> None:
        self.release = threading.Event()

    def submit(self, originator, recipients, text) -> SubmitResult:  # type: ignore[no-untyped-def]
        self.release.wait(5.0)
        return SubmitResult.ok()


# ---------------------------------------------------------------------------
# truncate / parse_recipients
# ---------------------------------------------------------------------------


class TestTruncate:
    def test_short_text_unchanged(self) -> None:
        assert truncate("disk full") == "disk full"

    def test_exactly_max_length_unchanged(self) -> None:
        text = "a" * 140
        assert truncate(text) == text

    def test_one_over_is_cut_with_marker(self) -> None:
        result = truncate("a" * 141)
        assert result == "a" * 140 + "..."
        assert len(result) == 143

    def test_custom_limit_and_marker(self) -> None:
        assert truncate("abcdef", 3, "~") == "abc~"


class TestParseRecipients:
    def test_comma_delimited(self) -> None:
        assert parse_recipients("a@x,b@x,c@x") == ("a@x", "b@x", "c@x")

    def test_strips_and_drops_empty_segments(self) -> None:
        assert parse_recipients(" a@x , ,b@x,") == ("a@x", "b@x")

    def test_sequence_input(self) -> None:
        assert parse_recipients(["+1", " ", "+2"]) == ("+1", "+2")


# ---------------------------------------------------------------------------
# NotificationAppenderConfig
# ---------------------------------------------------------------------------


class TestNotificationAppenderConfig:
    def test_defaults(self) -> None:
        config = _config()
        assert config.level is Level.ERROR
        assert config.recipients == ("+31600000001", "+31600000002", "+31600000003")
        assert config.max_length == 140

    def test_level_name_parsed(self) -> None:
        assert _config(level="warn").level is Level.WARN

    def test_blank_originator_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            _config(originator=" ")

    def test_no_recipients_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            _config(recipients=",,")

    def test_unknown_level_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            _config(level="loud")

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            _config(timeout_seconds=0)


# ---------------------------------------------------------------------------
# NotificationAppender
# ---------------------------------------------------------------------------


class TestNotificationAppender:
    def test_submits_raw_message_to_all_recipients(self) -> None:
        client = InMemoryGatewayClient()
        app = NotificationAppender(_config(), client)
        assert app.deliver(_event("disk full")) is True
        sent = client.last()
        assert sent is not None
        assert sent.originator == "TestApp"
        assert sent.recipients == app.recipients
        assert len(sent.recipients) == 3
        assert sent.text == "disk full"
        assert client.count == 1

    def test_long_message_truncated(self) -> None:
        client = InMemoryGatewayClient()
        app = NotificationAppender(_config(), client)
        app.deliver(_event("x" * 200))
        text = client.last().text  # type: ignore[union-attr]
        assert len(text) == 143
        assert text.endswith("...")
        assert text[:140] == "x" * 140

    def test_bound_formatter_applied_before_truncation(self) -> None:
        client = InMemoryGatewayClient()
        app = NotificationAppender(_config(), client, formatter=LineFormatter())
        app.deliver(_event("boom"))
        assert client.last().text.endswith("ERROR [TestApp] boom")  # type: ignore[union-attr]

    def test_threshold_is_error_by_default(self) -> None:
        app = NotificationAppender(_config(), InMemoryGatewayClient())
        assert app.name == "notification"
        assert not app.accepts(Level.WARN)
        assert app.accepts(Level.ERROR)
        assert app.accepts(Level.FATAL)

    def test_rejected_submission_is_contained(self) -> None:
        diagnostics = InMemoryDiagnostics()
        client = FailingGatewayClient("quota exceeded")
        app = NotificationAppender(_config(), client, diagnostics=diagnostics)
        assert app.deliver(_event("boom")) is False
        assert client.attempts == 1
        _, error, _ = diagnostics.reports[0]
        assert isinstance(error, DeliveryError)
        assert "quota exceeded" in error.message

    def test_raising_client_is_contained(self) -> None:
        diagnostics = InMemoryDiagnostics()
        client = FailingGatewayClient(raise_error=True)
        app = NotificationAppender(_config(), client, diagnostics=diagnostics)
        assert app.deliver(_event("boom")) is False
        _, error, _ = diagnostics.reports[0]
        assert isinstance(error.__cause__, RuntimeError)

    def test_hung_gateway_times_out(self) -> None:
        diagnostics = InMemoryDiagnostics()
        client = _HangingClient()
        app = NotificationAppender(_config(timeout_seconds=0.05), client, diagnostics=diagnostics)
        try:
            assert app.deliver(_event("boom")) is False
        finally:
            client.release.set()
        _, error, _ = diagnostics.reports[0]
        assert isinstance(error, DeliveryError)
        assert isinstance(error.__cause__, AppTimeoutError)

    def test_missing_client_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            NotificationAppender(_config(), None)  # type: ignore[arg-type]

    def test_close_only_closes_owned_client(self) -> None:
        class _ClosableClient(InMemoryGatewayClient):
            closed = False

            def close(self) -> None:
                self.closed = True

        borrowed = _ClosableClient()
        NotificationAppender(_config(), borrowed).close()
        assert borrowed.closed is False

        owned = _ClosableClient()
        NotificationAppender(_config(), owned, close_client=True).close()
        assert owned.closed is True


class TestNotificationAppenderIsolation:
    def test_hung_appender_does_not_starve_another(self) -> None:
        hung_client = _HangingClient()
        hung = NotificationAppender(
            _config(timeout_seconds=0.2), hung_client, name="hung", diagnostics=InMemoryDiagnostics()
        )
        healthy_client = InMemoryGatewayClient()
        healthy = NotificationAppender(
            _config(timeout_seconds=1.0), healthy_client, name="healthy", diagnostics=InMemoryDiagnostics()
        )
        try:
            threads = [
                threading.Thread(target=hung.deliver, args=(_event(f"stuck {i}"),)) for i in range(10)
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join(5.0)
            assert hung.failed == 10

            assert healthy.deliver(_event("still works")) is True
            assert healthy_client.count == 1
        finally:
            hung_client.release.set()
            hung.close()
            healthy.close()

    def test_close_releases_worker_pool(self) -> None:
        client = InMemoryGatewayClient()
        app = NotificationAppender(_config(), client)
        app.deliver(_event("boom"))
        app.close()
        assert app._timeout._executor is None
