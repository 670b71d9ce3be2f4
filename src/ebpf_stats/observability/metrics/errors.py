"""Observability – metrics errors."""
from __future__ import annotations

from typing import Any

from ebpf_stats.config.validation import ConfigError
from ebpf_stats.kernel.errors import ApplicationError


class LabelHashError(ApplicationError):
    """A label set could not be reduced to a stable identity key."""

    default_code = "label_hash_error"


class DuplicateInstrumentError(ConfigError):
    """An instrument with the same name is already registered on the provider."""

    default_code = "duplicate_instrument"

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(f"Instrument '{name}' is already registered", **kwargs)
        self.name = name


class MetricsInitError(ConfigError):
    """The metrics backend or its exposition listener could not be started."""

    default_code = "metrics_init_error"


__all__ = ["DuplicateInstrumentError", "LabelHashError", "MetricsInitError"]
