"""Config – 12-factor settings for buffering, limits and diagnostics."""
from logthis.config.settings import (
    DotenvSettingsLoader,
    EnvSettingsLoader,
    LogthisSettings,
    Settings,
    SettingsFactory,
    SettingsLoader,
)
from logthis.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LogthisSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
