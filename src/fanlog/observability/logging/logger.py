"""Observability – Logger handle bound to one category."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from fanlog.observability.logging.levels import Level

if TYPE_CHECKING:
    from fanlog.observability.logging.dispatcher import Dispatcher


class Logger:
    """Named front-end forwarding every call to :meth:`Dispatcher.emit`.

    Holds no filtering or buffering of its own.
    """

    __slots__ = ("_name", "_dispatcher")

    def __init__(self, name: str, dispatcher: "Dispatcher") -> None:
        self._name = name
        self._dispatcher = dispatcher

    @property
    def name(self) -> str:
        return self._name

    def log(
        self,
        level: Level | str,
        message: str,
        payload: Mapping[str, Any] | None = None,
        *,
        exc: BaseException | str | None = None,
    ) -> None:
        self._dispatcher.emit(self._name, level, message, payload, exc=exc)

    def trace(self, message: str, payload: Mapping[str, Any] | None = None, *, exc: Any = None) -> None:
        self.log(Level.TRACE, message, payload, exc=exc)

    def debug(self, message: str, payload: Mapping[str, Any] | None = None, *, exc: Any = None) -> None:
        self.log(Level.DEBUG, message, payload, exc=exc)

    def info(self, message: str, payload: Mapping[str, Any] | None = None, *, exc: Any = None) -> None:
        self.log(Level.INFO, message, payload, exc=exc)

    def warn(self, message: str, payload: Mapping[str, Any] | None = None, *, exc: Any = None) -> None:
        self.log(Level.WARN, message, payload, exc=exc)

    # common alias
    warning = warn

    def error(self, message: str, payload: Mapping[str, Any] | None = None, *, exc: Any = None) -> None:
        self.log(Level.ERROR, message, payload, exc=exc)

    def fatal(self, message: str, payload: Mapping[str, Any] | None = None, *, exc: Any = None) -> None:
        self.log(Level.FATAL, message, payload, exc=exc)

    def __repr__(self) -> str:
        return f"Logger({self._name!r})"


__all__ = ["Logger"]
