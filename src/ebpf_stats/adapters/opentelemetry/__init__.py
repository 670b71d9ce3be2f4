"""OpenTelemetry adapter – set/increment/gauge instruments on a Meter."""
from ebpf_stats.adapters.opentelemetry.metrics import (
    OtelGauge,
    OtelIncrementCounter,
    OtelLabeledGauge,
    OtelMetricsProvider,
    OtelSetCounter,
)

__all__ = ["OtelGauge", "OtelIncrementCounter", "OtelLabeledGauge", "OtelMetricsProvider", "OtelSetCounter"]
