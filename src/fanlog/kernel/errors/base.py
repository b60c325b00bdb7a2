"""Kernel errors – BaseError."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Common ancestor of every error fanlog raises or reports.

    Each error carries a stable ``code`` slug, a human ``message`` and an
    optional ``detail`` dict. :meth:`to_dict` is the form written to the
    diagnostics channel.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"code": self.code, "message": self.message, "detail": self.detail}
        if self.cause is not None:
            data["cause"] = repr(self.cause)
        return data

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), default=str, ensure_ascii=False)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"


__all__ = ["BaseError"]
