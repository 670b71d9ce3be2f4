"""Config – 12-factor settings, loaders, and validation errors."""

from ebpf_stats.config.settings import DotenvSettingsLoader, EnvSettingsLoader, Settings, SettingsLoader
from ebpf_stats.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError

__all__ = [
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
