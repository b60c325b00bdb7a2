"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from fanlog.config.settings.base import Settings
from fanlog.config.settings.loaders import SettingsLoader
from fanlog.config.validation.errors import ConfigurationError, MissingRequiredSettingError

S = TypeVar("S", bound=Settings)


def _required(settings_cls: type[Settings]) -> list[str]:
    return [
        f.name
        for f in dataclasses.fields(settings_cls)
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING
    ]


class SettingsFactory:
    """Build one settings object from several sources.

    Sources are consulted in order and later ones win field by field;
    *overrides* win over every source. A source lacking a required field is
    passed over so another can supply it, but a source holding an invalid
    value stops the build.
    """

    @staticmethod
    def create(
        settings_cls: type[S],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> S:
        """Return a validated *settings_cls* instance.

        Raises :class:`MissingRequiredSettingError` naming the first required
        field no source provided, and :class:`ConfigurationError` for anything
        the settings class itself rejects.
        """
        values: dict[str, Any] = {}
        for loader in loaders or ():
            try:
                loaded = loader.load(settings_cls)
            except MissingRequiredSettingError:
                continue
            values.update(dataclasses.asdict(loaded))

        values.update(overrides or {})

        for name in _required(settings_cls):
            if name not in values:
                raise MissingRequiredSettingError(name)

        try:
            return settings_cls(**values)
        except ConfigurationError:
            raise
        except TypeError as exc:
            raise ConfigurationError(f"Cannot build {settings_cls.__name__}: {exc}") from exc


__all__ = ["SettingsFactory"]
