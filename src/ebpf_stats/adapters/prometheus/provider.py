"""Prometheus adapter – PrometheusMetricsProvider.

Wires an OpenTelemetry SDK ``MeterProvider`` to a ``PrometheusMetricReader``
and serves the resulting registry on the configured port and path::

    cancel = threading.Event()
    provider = PrometheusMetricsProvider(PrometheusSettings(port=9091), cancel=cancel)
    pushes = provider.new_increment_counter("image_push")
    pushes.increment({"op": "push"})
    ...
    cancel.set()  # stops the listener and shuts the meter provider down
"""
from __future__ import annotations

import threading
from types import TracebackType

from opentelemetry import metrics
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from prometheus_client import REGISTRY

from ebpf_stats.adapters.opentelemetry import OtelMetricsProvider
from ebpf_stats.adapters.prometheus.server import ExpositionServer
from ebpf_stats.adapters.prometheus.settings import PrometheusSettings
from ebpf_stats.observability.logging import get_logger
from ebpf_stats.observability.metrics import DuplicateInstrumentError, MetricsInitError

logger = get_logger(__name__)

# Upper bound on the delay between the cancel signal and teardown.
_WATCH_INTERVAL = 0.1

# Every PrometheusMetricReader feeds the process-wide REGISTRY, so instrument
# names are unique across all live providers.
_registered_names: set[str] = set()
_registered_names_lock = threading.Lock()


class PrometheusMetricsProvider(OtelMetricsProvider):
    """Metrics provider exposing its instruments for Prometheus scrapes.

    Construction binds the listener; failure raises :class:`MetricsInitError`
    and leaves nothing running.  When *cancel* is given, setting it closes
    the provider from a background watcher thread.  :meth:`close` may also be
    called directly and is idempotent.
    """

    def __init__(
        self,
        settings: PrometheusSettings | None = None,
        *,
        cancel: threading.Event | None = None,
    ) -> None:
        self._settings = settings or PrometheusSettings()
        self._closed = threading.Event()
        self._close_lock = threading.Lock()
        self._closing = False

        try:
            reader = PrometheusMetricReader()
        except Exception as exc:  # noqa: BLE001
            logger.error("metrics.exporter_init_failed", error=str(exc))
            raise MetricsInitError(f"Failed to initialize prometheus exporter: {exc}", cause=exc) from exc
        self._meter_provider = MeterProvider(metric_readers=[reader])

        try:
            self._server = ExpositionServer(
                self._settings.host,
                self._settings.port,
                self._settings.path,
                REGISTRY,
            )
        except OSError as exc:
            self._meter_provider.shutdown()
            logger.error("metrics.listener_bind_failed", port=self._settings.port, error=str(exc))
            raise MetricsInitError(
                f"Failed to bind metrics listener on port {self._settings.port}: {exc}",
                detail={"host": self._settings.host, "port": self._settings.port},
                cause=exc,
            ) from exc

        if self._settings.install_global:
            metrics.set_meter_provider(self._meter_provider)

        super().__init__(self._meter_provider.get_meter(self._settings.meter_name))
        self._server.start()

        self._watcher: threading.Thread | None = None
        if cancel is not None:
            self._watcher = threading.Thread(
                target=self._watch,
                args=(cancel,),
                name="metrics-cancel-watcher",
                daemon=True,
            )
            self._watcher.start()

    @property
    def settings(self) -> PrometheusSettings:
        return self._settings

    @property
    def port(self) -> int:
        """Port the exposition listener is actually bound to."""
        return self._server.port

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def _reserve(self, name: str, kind: str) -> None:
        with _registered_names_lock:
            if name in _registered_names:
                raise DuplicateInstrumentError(name, detail={"kind": kind, "scope": "process"})
            _registered_names.add(name)
        super()._reserve(name, kind)

    def _watch(self, cancel: threading.Event) -> None:
        # Waits in short slices so the thread also exits after a direct close().
        while not self._closed.is_set():
            if cancel.wait(_WATCH_INTERVAL):
                logger.info("metrics.cancelled")
                self.close()
                return

    def close(self) -> None:
        """Stop the listener, then shut the meter provider down."""
        with self._close_lock:
            if self._closing:
                return
            self._closing = True
        timeout = self._settings.shutdown_timeout
        try:
            self._server.stop(timeout)
            self._meter_provider.shutdown(timeout_millis=timeout * 1000)
        finally:
            with _registered_names_lock:
                _registered_names.difference_update(self._names)
            self._closed.set()

    def wait_closed(self, timeout: float | None = None) -> bool:
        """Block until the provider is closed; ``False`` on timeout."""
        return self._closed.wait(timeout)

    def __enter__(self) -> PrometheusMetricsProvider:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = ["PrometheusMetricsProvider"]
