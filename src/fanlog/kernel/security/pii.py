"""Kernel security – default sensitive fields."""
from __future__ import annotations

# Payload keys (lower-cased) whose values never reach a log destination.
DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey", "access_key",
    "authorization", "credit_card", "card_number", "cvv", "ssn",
})

__all__ = ["DEFAULT_SENSITIVE_FIELDS"]
