"""Prometheus adapter – pull-based exposition of OpenTelemetry instruments."""
from ebpf_stats.adapters.prometheus.settings import PrometheusSettings
from ebpf_stats.adapters.prometheus.server import ExpositionServer
from ebpf_stats.adapters.prometheus.provider import PrometheusMetricsProvider

__all__ = ["ExpositionServer", "PrometheusMetricsProvider", "PrometheusSettings"]
