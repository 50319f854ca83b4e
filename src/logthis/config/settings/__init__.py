"""Config settings – 12-factor env-based configuration."""
from logthis.config.settings.base import LogthisSettings, Settings
from logthis.config.settings.factory import SettingsFactory
from logthis.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "LogthisSettings",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
