"""Config settings – environment and ``.env`` loaders."""
from __future__ import annotations

import abc
import dataclasses
import os
import typing
from typing import Any, Callable, TypeVar

from dotenv import load_dotenv

from fanlog.config.settings.base import Settings
from fanlog.config.validation import (
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

S = TypeVar("S", bound=Settings)


def _to_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


_CONVERTERS: dict[Any, Callable[[str], Any]] = {
    bool: _to_bool,
    int: int,
    float: float,
}


class SettingsLoader(abc.ABC):
    """Port: produce a settings object from one configuration source."""

    @abc.abstractmethod
    def load(self, settings_class: type[S]) -> S: ...


class EnvSettingsLoader(SettingsLoader):
    """Read ``<PREFIX>_<FIELD>`` variables from ``os.environ``.

    ``int``, ``float`` and ``bool`` fields are converted from text; any other
    annotation receives the raw string.
    """

    def __init__(self, environ: typing.Mapping[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[S]) -> S:
        environ = os.environ if self._environ is None else self._environ
        prefix = settings_class._prefix.upper()
        types = typing.get_type_hints(settings_class)
        values: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):
            key = f"{prefix}_{field.name.upper()}" if prefix else field.name.upper()
            if key not in environ:
                if field.default is dataclasses.MISSING and field.default_factory is dataclasses.MISSING:
                    raise MissingRequiredSettingError(key)
                continue
            raw = environ[key]
            convert = _CONVERTERS.get(types.get(field.name), str)
            try:
                values[field.name] = convert(raw)
            except ValueError as exc:
                raise InvalidSettingValueError(key, raw, str(exc)) from exc

        try:
            return settings_class(**values)
        except ConfigurationError:
            raise
        except TypeError as exc:
            raise ConfigurationError(f"Cannot build {settings_class.__name__}: {exc}") from exc


class DotenvSettingsLoader(SettingsLoader):
    """Merge a ``.env`` file into the environment, then read it like :class:`EnvSettingsLoader`.

    Variables already present in the environment win unless *override* is set.
    """

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[S]) -> S:
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
