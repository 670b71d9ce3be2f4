"""
ebpf_stats – set/increment metrics on a monotonic-counter, pull-sampled backend.

Import path convention::

    from ebpf_stats.adapters.prometheus import PrometheusMetricsProvider, PrometheusSettings
    from ebpf_stats.observability.metrics import MetricsProvider, SetInstrument
    from ebpf_stats.kernel.errors import BaseError
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
