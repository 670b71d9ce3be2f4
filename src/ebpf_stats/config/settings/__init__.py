"""Config settings – 12-factor env-based configuration."""
from ebpf_stats.config.settings.base import Settings
from ebpf_stats.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "Settings", "SettingsLoader"]
