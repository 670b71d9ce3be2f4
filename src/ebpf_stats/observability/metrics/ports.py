"""Observability – SetInstrument, IncrementInstrument, MetricsProvider ports."""
from __future__ import annotations

import abc

from ebpf_stats.observability.metrics.labels import LabelSet


class IncrementInstrument(abc.ABC):
    """Counter that only ever moves up by one."""

    @abc.abstractmethod
    def increment(self, labels: LabelSet | None = None) -> None: ...


class SetInstrument(abc.ABC):
    """Instrument reported with "set to absolute value" semantics."""

    @abc.abstractmethod
    def set(self, value: int, labels: LabelSet | None = None) -> None: ...


class MetricsProvider(abc.ABC):
    """Port: factory for named instruments.

    Names are unique per provider; creating a second instrument with a name
    already in use raises :class:`DuplicateInstrumentError`.
    """

    @abc.abstractmethod
    def new_set_counter(self, name: str, description: str = "", unit: str = "") -> SetInstrument: ...

    @abc.abstractmethod
    def new_increment_counter(self, name: str, description: str = "", unit: str = "") -> IncrementInstrument: ...

    @abc.abstractmethod
    def new_gauge(self, name: str, description: str = "", unit: str = "") -> SetInstrument: ...

    @abc.abstractmethod
    def new_labeled_gauge(self, name: str, description: str = "", unit: str = "") -> SetInstrument: ...


__all__ = ["IncrementInstrument", "MetricsProvider", "SetInstrument"]
