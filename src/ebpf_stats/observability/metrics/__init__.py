"""Observability – metrics ports, label hashing, no-op provider."""
from ebpf_stats.observability.metrics.errors import DuplicateInstrumentError, LabelHashError, MetricsInitError
from ebpf_stats.observability.metrics.labels import LabelKey, LabelSet, hash_labels, to_attributes
from ebpf_stats.observability.metrics.ports import IncrementInstrument, MetricsProvider, SetInstrument
from ebpf_stats.observability.metrics.noop import NoopMetricsProvider

__all__ = [
    "DuplicateInstrumentError",
    "IncrementInstrument",
    "LabelHashError",
    "LabelKey",
    "LabelSet",
    "MetricsInitError",
    "MetricsProvider",
    "NoopMetricsProvider",
    "SetInstrument",
    "hash_labels",
    "to_attributes",
]
