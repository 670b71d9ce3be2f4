"""Observability – logging and metrics ports."""

from ebpf_stats.observability.logging import JsonLoggerFactory, get_logger
from ebpf_stats.observability.metrics import (
    IncrementInstrument,
    LabelHashError,
    MetricsProvider,
    NoopMetricsProvider,
    SetInstrument,
    hash_labels,
)

__all__ = [
    "IncrementInstrument",
    "JsonLoggerFactory",
    "LabelHashError",
    "MetricsProvider",
    "NoopMetricsProvider",
    "SetInstrument",
    "get_logger",
    "hash_labels",
]
