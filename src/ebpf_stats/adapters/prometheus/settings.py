"""Prometheus adapter – PrometheusSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from ebpf_stats.config.settings import Settings
from ebpf_stats.config.validation import InvalidSettingValueError

DEFAULT_PORT = 9091
DEFAULT_PATH = "/metrics"
DEFAULT_METER_NAME = "ebpf.solo.io"


@dataclasses.dataclass
class PrometheusSettings(Settings):
    """Exposition listener and meter configuration.

    Read from ``METRICS_*`` environment variables by
    :class:`~ebpf_stats.config.settings.EnvSettingsLoader`.  ``port=0`` asks
    the OS for a free port; an empty ``path`` falls back to ``/metrics``.
    """

    _prefix: ClassVar[str] = "METRICS"

    port: int = DEFAULT_PORT
    path: str = DEFAULT_PATH
    host: str = ""
    meter_name: str = DEFAULT_METER_NAME
    shutdown_timeout: float = 5.0
    install_global: bool = False

    def _validate(self) -> None:
        if not self.path:
            self.path = DEFAULT_PATH
        if not 0 <= self.port <= 65535:
            raise InvalidSettingValueError("port", self.port, "must be between 0 and 65535")
        if not self.path.startswith("/"):
            raise InvalidSettingValueError("path", self.path, "must start with '/'")
        if not self.meter_name:
            raise InvalidSettingValueError("meter_name", self.meter_name, "must not be empty")
        if self.shutdown_timeout < 0:
            raise InvalidSettingValueError("shutdown_timeout", self.shutdown_timeout, "must not be negative")


__all__ = ["DEFAULT_METER_NAME", "DEFAULT_PATH", "DEFAULT_PORT", "PrometheusSettings"]
