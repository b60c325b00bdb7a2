"""Kernel security – sensitive payload keys."""
from fanlog.kernel.security.pii import DEFAULT_SENSITIVE_FIELDS

__all__ = ["DEFAULT_SENSITIVE_FIELDS"]
