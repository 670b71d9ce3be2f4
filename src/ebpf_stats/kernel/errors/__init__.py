"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    └── ApplicationError          (application.py)
        ├── ConfigError           (ebpf_stats.config.validation)
        │   ├── MissingRequiredSettingError
        │   ├── InvalidSettingValueError
        │   ├── DuplicateInstrumentError
        │   └── MetricsInitError
        └── LabelHashError        (ebpf_stats.observability.metrics)
"""

from ebpf_stats.kernel.errors.application import ApplicationError
from ebpf_stats.kernel.errors.base import BaseError

__all__ = ["ApplicationError", "BaseError"]
