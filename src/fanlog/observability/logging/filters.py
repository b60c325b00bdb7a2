"""Observability – SensitiveFieldsFilter."""
from __future__ import annotations

from typing import Any, Mapping

from fanlog.kernel.security import DEFAULT_SENSITIVE_FIELDS


class SensitiveFieldsFilter:
    """Replace values of sensitive keys with ``[REDACTED]``."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        self._fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS

    def redact(self, data: Mapping[str, Any]) -> dict[str, Any]:
        return {k: (self.REDACTED if k.lower() in self._fields else v) for k, v in data.items()}

    def redact_deep(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Recursively redact nested mappings, including mappings inside lists and tuples.

        Nested containers come back as plain ``dict`` and ``list``.
        """
        return {
            k: (self.REDACTED if str(k).lower() in self._fields else self._redact_value(v))
            for k, v in data.items()
        }

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            return self.redact_deep(value)
        if isinstance(value, (list, tuple)):
            return [self._redact_value(v) for v in value]
        return value


__all__ = ["SensitiveFieldsFilter"]
