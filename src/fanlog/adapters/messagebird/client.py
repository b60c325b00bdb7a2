"""MessageBird adapter – GatewayClient over the MessageBird SMS REST API."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence

import httpx
import tenacity

from fanlog.application.notifications import SubmitResult
from fanlog.config.validation import ConfigurationError, InvalidSettingValueError
from fanlog.kernel.errors import ExternalServiceError, TimeoutError as AppTimeoutError
from fanlog.resilience.retry import TenacityRetryPolicy

SERVICE = "messagebird"
MAX_BACKOFF_SECONDS = 2.0


@dataclasses.dataclass(frozen=True)
class MessageBirdConfig:
    """Connection and retry settings.

    *timeout* applies to each HTTP attempt (httpx enforces it per connect,
    write and read phase). :meth:`for_deadline` sizes it so every attempt
    plus the backoff between attempts fits inside an outer deadline.
    """

    access_key: str
    base_url: str = "https://rest.messagebird.com"
    timeout: float = 10.0
    max_attempts: int = 2
    retry_backoff_seconds: float = 0.2

    def __post_init__(self) -> None:
        if not self.access_key or not self.access_key.strip():
            raise ConfigurationError("MessageBird access key is required")
        if self.timeout <= 0:
            raise InvalidSettingValueError("timeout", self.timeout, "must be positive")
        if self.max_attempts < 1:
            raise InvalidSettingValueError("max_attempts", self.max_attempts, "must be >= 1")

    @property
    def backoff_total(self) -> float:
        """Sum of the pauses between attempts."""
        return sum(
            min(self.retry_backoff_seconds * 2**i, MAX_BACKOFF_SECONDS)
            for i in range(self.max_attempts - 1)
        )

    @property
    def retry_budget(self) -> float:
        """Worst-case seconds spent on one submission with all retries."""
        return self.max_attempts * self.timeout + self.backoff_total

    @classmethod
    def for_deadline(
        cls,
        access_key: str,
        deadline: float,
        *,
        max_attempts: int = 2,
        retry_backoff_seconds: float = 0.2,
        headroom: float = 0.9,
        **kwargs: Any,
    ) -> "MessageBirdConfig":
        """Config whose :attr:`retry_budget` stays below *deadline* times *headroom*.

        The backoff is dropped when it would take half of the usable time.
        """
        if deadline <= 0:
            raise InvalidSettingValueError("deadline", deadline, "must be positive")
        usable = deadline * headroom
        unsized = cls(access_key, max_attempts=max_attempts, retry_backoff_seconds=retry_backoff_seconds)
        if unsized.backoff_total * 2 > usable:
            retry_backoff_seconds = 0.0
            backoff = 0.0
        else:
            backoff = unsized.backoff_total
        return cls(
            access_key,
            timeout=(usable - backoff) / max_attempts,
            max_attempts=max_attempts,
            retry_backoff_seconds=retry_backoff_seconds,
            **kwargs,
        )


class MessageBirdClient:
    """Submit one SMS to all recipients with ``POST /messages``.

    Timeouts, transport errors and 5xx responses are retried up to
    ``max_attempts`` times; any other non-2xx response is a failed
    :class:`SubmitResult` carrying the API's first error description.
    The underlying :class:`httpx.Client` pools connections and is safe to
    share between threads.
    """

    def __init__(self, config: MessageBirdConfig, **client_kwargs: Any) -> None:
        self._config = config
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            headers={
                "Authorization": f"AccessKey {config.access_key}",
                "Accept": "application/json",
            },
            **client_kwargs,
        )
        self._retry = TenacityRetryPolicy(
            max_attempts=config.max_attempts,
            wait=tenacity.wait_exponential(multiplier=config.retry_backoff_seconds, max=MAX_BACKOFF_SECONDS),
            retry=tenacity.retry_if_exception_type((AppTimeoutError, ExternalServiceError)),
        )

    def __enter__(self) -> "MessageBirdClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def config(self) -> MessageBirdConfig:
        return self._config

    def close(self) -> None:
        self._client.close()

    def submit(self, originator: str, recipients: Sequence[str], text: str) -> SubmitResult:
        payload = {
            "originator": originator,
            "recipients": list(recipients),
            "body": text,
        }
        try:
            response = self._retry.execute(lambda: self._post(payload))
        except (AppTimeoutError, ExternalServiceError) as exc:
            return SubmitResult.failure(exc.message)

        if response.is_success:
            return SubmitResult.ok(_json(response).get("id"))
        return SubmitResult.failure(_error_description(response))

    def _post(self, payload: dict[str, Any]) -> httpx.Response:
        try:
            response = self._client.post("/messages", json=payload)
        except httpx.TimeoutException as exc:
            raise AppTimeoutError(f"{SERVICE} request timed out") from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=SERVICE, message=str(exc)) from exc
        if response.status_code >= 500:
            raise ExternalServiceError(
                service=SERVICE,
                message=f"HTTP {response.status_code} from {SERVICE}",
                status_code=response.status_code,
            )
        return response


def _json(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_description(response: httpx.Response) -> str:
    errors = _json(response).get("errors") or []
    if errors and isinstance(errors[0], dict) and errors[0].get("description"):
        return f"HTTP {response.status_code}: {errors[0]['description']}"
    return f"HTTP {response.status_code}"


__all__ = ["MessageBirdClient", "MessageBirdConfig"]
