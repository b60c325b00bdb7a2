"""Application-layer errors – raised while wiring the pipeline together."""

from __future__ import annotations

from fanlog.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting application-layer concern."""

    default_code = "application_error"


class ConfigurationError(ApplicationError):
    """Appender or settings configuration is malformed or incomplete.

    Always surfaced to the operator at construction time, never swallowed.
    """

    default_code = "configuration_error"


__all__ = ["ApplicationError", "ConfigurationError"]
