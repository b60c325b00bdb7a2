"""Unit tests for the gateway port and in-memory gateway fakes."""

from __future__ import annotations

import threading

import pytest

from fanlog.application.notifications import (
    FailingGatewayClient,
    GatewayClient,
    InMemoryGatewayClient,
    SentNotification,
    SubmitResult,
)


class TestSubmitResult:
    def test_ok(self) -> None:
        result = SubmitResult.ok("id-1")
        assert result.success is True
        assert result.message_id == "id-1"
        assert result.reason is None

    def test_failure(self) -> None:
        result = SubmitResult.failure("quota")
        assert result.success is False
        assert result.reason == "quota"


class TestInMemoryGatewayClient:
    def test_captures_submission(self) -> None:
        client = InMemoryGatewayClient()
        result = client.submit("App", ["+1", "+2"], "hello")
        assert result.success is True
        assert result.message_id == "mem-msg-1"
        assert client.last() == SentNotification("App", ("+1", "+2"), "hello")

    def test_reset(self) -> None:
        client = InMemoryGatewayClient()
        client.submit("App", ["+1"], "hello")
        client.reset()
        assert client.count == 0
        assert client.last() is None

    def test_concurrent_submissions(self) -> None:
        client = InMemoryGatewayClient()
        threads = [
            threading.Thread(target=client.submit, args=("App", ["+1"], f"m{i}")) for i in range(20)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert client.count == 20

    def test_satisfies_port(self) -> None:
        assert isinstance(InMemoryGatewayClient(), GatewayClient)


class TestFailingGatewayClient:
    def test_rejects(self) -> None:
        client = FailingGatewayClient("quota")
        assert client.submit("App", ["+1"], "x") == SubmitResult.failure("quota")
        assert client.attempts == 1

    def test_raises(self) -> None:
        client = FailingGatewayClient("down", raise_error=True)
        with pytest.raises(RuntimeError, match="down"):
            client.submit("App", ["+1"], "x")
