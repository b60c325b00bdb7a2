"""Config settings – 12-factor env-based configuration."""
from fanlog.config.settings.base import Settings
from fanlog.config.settings.factory import SettingsFactory
from fanlog.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsFactory", "SettingsLoader"]
