"""Observability – NoopMetricsProvider implementation."""
from __future__ import annotations

from ebpf_stats.observability.metrics.labels import LabelSet
from ebpf_stats.observability.metrics.ports import IncrementInstrument, MetricsProvider, SetInstrument


class _NoopSetInstrument(SetInstrument):
    def set(self, value: int, labels: LabelSet | None = None) -> None:
        pass


class _NoopIncrementInstrument(IncrementInstrument):
    def increment(self, labels: LabelSet | None = None) -> None:
        pass


class NoopMetricsProvider(MetricsProvider):
    """Silent no-op provider (useful in tests or when metrics are disabled)."""

    def new_set_counter(self, name: str, description: str = "", unit: str = "") -> SetInstrument:
        return _NoopSetInstrument()

    def new_increment_counter(self, name: str, description: str = "", unit: str = "") -> IncrementInstrument:
        return _NoopIncrementInstrument()

    def new_gauge(self, name: str, description: str = "", unit: str = "") -> SetInstrument:
        return _NoopSetInstrument()

    def new_labeled_gauge(self, name: str, description: str = "", unit: str = "") -> SetInstrument:
        return _NoopSetInstrument()


__all__ = ["NoopMetricsProvider"]
