"""OpenTelemetry adapter – instruments and OtelMetricsProvider.

The backend offers monotonic counters and pull-sampled observable gauges.
These instruments present "set to absolute value" and "increment" semantics
on top of them.
"""
from __future__ import annotations

import threading
from typing import Any

from opentelemetry.metrics import CallbackOptions, Meter, Observation

from ebpf_stats.config.validation import InvalidSettingValueError
from ebpf_stats.observability.logging import get_logger
from ebpf_stats.observability.metrics import (
    DuplicateInstrumentError,
    IncrementInstrument,
    LabelKey,
    LabelSet,
    MetricsProvider,
    SetInstrument,
    hash_labels,
    to_attributes,
)

logger = get_logger(__name__)


class OtelIncrementCounter(IncrementInstrument):
    def __init__(self, counter: Any) -> None:
        self._c = counter

    def increment(self, labels: LabelSet | None = None) -> None:
        self._c.add(1, attributes=to_attributes(labels))


class OtelSetCounter(SetInstrument):
    """Translate absolute values into deltas on an additive backend counter.

    The last value reported for every distinct label set is remembered, and
    only the difference to it is added.  Setting the value already held is a
    no-op and produces no backend call.  The backend total for a label set
    therefore always equals the last value set for it.
    """

    def __init__(self, counter: Any) -> None:
        self._c = counter
        self._last: dict[LabelKey, int] = {}
        self._lock = threading.Lock()

    def set(self, value: int, labels: LabelSet | None = None) -> None:
        """Report *value* as the current total for *labels*.

        Raises :class:`LabelHashError` if *labels* cannot be hashed; the
        instrument state is left untouched in that case.
        """
        key = hash_labels(labels)
        attributes = to_attributes(labels)
        with self._lock:
            previous = self._last.get(key, 0)
            if value == previous:
                return
            self._last[key] = value
            self._c.add(value - previous, attributes=attributes)

    def current(self, labels: LabelSet | None = None) -> int:
        """Return the last value set for *labels* (0 if never set)."""
        key = hash_labels(labels)
        with self._lock:
            return self._last.get(key, 0)


class OtelGauge(SetInstrument):
    """Single-slot gauge sampled by the backend on its own schedule.

    .. note::
        Only ONE (value, labels) pair is kept.  Every :meth:`set` replaces it,
        whatever label set is passed, so a scrape reports only the labels of
        the most recent call.  Use one gauge per fixed label combination, or
        :class:`OtelLabeledGauge` to keep one value per label set.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0
        self._attributes: dict[str, str] = {}

    def set(self, value: int, labels: LabelSet | None = None) -> None:
        attributes = to_attributes(labels)
        with self._lock:
            self._value = value
            self._attributes = attributes

    def snapshot(self) -> tuple[int, dict[str, str]]:
        with self._lock:
            return self._value, dict(self._attributes)

    def observe(self, options: CallbackOptions) -> list[Observation]:  # noqa: ARG002
        value, attributes = self.snapshot()
        return [Observation(value, attributes)]


class OtelLabeledGauge(SetInstrument):
    """Gauge keeping the latest value of every distinct label set."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._slots: dict[LabelKey, tuple[int, dict[str, str]]] = {}

    def set(self, value: int, labels: LabelSet | None = None) -> None:
        key = hash_labels(labels)
        attributes = to_attributes(labels)
        with self._lock:
            self._slots[key] = (value, attributes)

    def snapshot(self) -> list[tuple[int, dict[str, str]]]:
        with self._lock:
            return [(value, dict(attributes)) for value, attributes in self._slots.values()]

    def observe(self, options: CallbackOptions) -> list[Observation]:  # noqa: ARG002
        return [Observation(value, attributes) for value, attributes in self.snapshot()]


class OtelMetricsProvider(MetricsProvider):
    """Build set/increment/gauge instruments on an OpenTelemetry ``Meter``."""

    def __init__(self, meter: Meter) -> None:
        self._meter = meter
        self._names: set[str] = set()
        self._names_lock = threading.Lock()

    @property
    def meter(self) -> Meter:
        return self._meter

    def _reserve(self, name: str, kind: str) -> None:
        """Record *name* as taken; subclasses may widen the uniqueness scope."""
        with self._names_lock:
            if name in self._names:
                raise DuplicateInstrumentError(name, detail={"kind": kind})
            self._names.add(name)

    def _claim(self, name: str, kind: str) -> None:
        if not name:
            raise InvalidSettingValueError("name", name, "instrument name must not be empty")
        self._reserve(name, kind)
        logger.debug("metrics.instrument_created", name=name, kind=kind)

    def new_set_counter(self, name: str, description: str = "", unit: str = "") -> SetInstrument:
        self._claim(name, "set_counter")
        # A monotonic Counter rejects negative amounts, which lowering a set value produces.
        return OtelSetCounter(self._meter.create_up_down_counter(name, unit=unit, description=description))

    def new_increment_counter(self, name: str, description: str = "", unit: str = "") -> IncrementInstrument:
        self._claim(name, "increment_counter")
        return OtelIncrementCounter(self._meter.create_counter(name, unit=unit, description=description))

    def new_gauge(self, name: str, description: str = "", unit: str = "") -> SetInstrument:
        self._claim(name, "gauge")
        gauge = OtelGauge()
        self._meter.create_observable_gauge(name, callbacks=[gauge.observe], unit=unit, description=description)
        return gauge

    def new_labeled_gauge(self, name: str, description: str = "", unit: str = "") -> SetInstrument:
        self._claim(name, "labeled_gauge")
        gauge = OtelLabeledGauge()
        self._meter.create_observable_gauge(name, callbacks=[gauge.observe], unit=unit, description=description)
        return gauge


__all__ = ["OtelGauge", "OtelIncrementCounter", "OtelLabeledGauge", "OtelMetricsProvider", "OtelSetCounter"]
