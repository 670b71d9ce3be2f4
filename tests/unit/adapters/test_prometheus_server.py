"""Unit tests for ExpositionServer over a real socket."""

from __future__ import annotations

import socket
import threading
import time
from collections.abc import Iterator

import httpx
import pytest
from prometheus_client import CollectorRegistry, Counter

from ebpf_stats.adapters.prometheus import ExpositionServer


class _HangingCollector:
    """Collector whose collect() blocks until released."""

    def __init__(self, release: threading.Event) -> None:
        self._release = release
        self.entered = threading.Event()

    def describe(self) -> list[object]:
        return []

    def collect(self) -> list[object]:
        self.entered.set()
        self._release.wait(10.0)
        return []


@pytest.fixture
def registry() -> CollectorRegistry:
    registry = CollectorRegistry()
    pushes = Counter("image_push", "Image pushes", ["op"], registry=registry)
    pushes.labels(op="push").inc(3)
    pulls = Counter("image_pull", "Image pulls", registry=registry)
    pulls.inc()
    return registry


@pytest.fixture
def server(registry: CollectorRegistry) -> Iterator[ExpositionServer]:
    server = ExpositionServer("127.0.0.1", 0, "/metrics", registry)
    server.start()
    yield server
    server.stop(timeout=2.0)


class TestExpositionServer:
    def test_binds_ephemeral_port(self, server: ExpositionServer) -> None:
        assert server.port > 0
        assert server.path == "/metrics"

    def test_serves_registry_on_path(self, server: ExpositionServer) -> None:
        response = httpx.get(f"http://127.0.0.1:{server.port}/metrics")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert 'image_push_total{op="push"} 3.0' in response.text

    def test_query_string_is_ignored(self, server: ExpositionServer) -> None:
        response = httpx.get(f"http://127.0.0.1:{server.port}/metrics?debug=1")
        assert response.status_code == 200

    def test_openmetrics_on_request(self, server: ExpositionServer) -> None:
        response = httpx.get(
            f"http://127.0.0.1:{server.port}/metrics",
            headers={"Accept": "application/openmetrics-text; version=1.0.0"},
        )
        assert response.headers["content-type"].startswith("application/openmetrics-text")
        assert response.text.rstrip().endswith("# EOF")

    def test_head_has_no_body(self, server: ExpositionServer) -> None:
        response = httpx.head(f"http://127.0.0.1:{server.port}/metrics")
        assert response.status_code == 200
        assert response.content == b""

    def test_other_paths_are_404(self, server: ExpositionServer) -> None:
        response = httpx.get(f"http://127.0.0.1:{server.port}/")
        assert response.status_code == 404

    def test_stop_is_idempotent(self, registry: CollectorRegistry) -> None:
        server = ExpositionServer("127.0.0.1", 0, "/metrics", registry)
        server.start()
        assert server.stop(timeout=2.0) is True
        assert server.stop(timeout=2.0) is True

    def test_stop_without_start(self, registry: CollectorRegistry) -> None:
        server = ExpositionServer("127.0.0.1", 0, "/metrics", registry)
        assert server.stop(timeout=0.1) is True

    def test_stopped_server_refuses_connections(self, registry: CollectorRegistry) -> None:
        server = ExpositionServer("127.0.0.1", 0, "/metrics", registry)
        server.start()
        port = server.port
        server.stop(timeout=2.0)
        with pytest.raises(httpx.ConnectError):
            httpx.get(f"http://127.0.0.1:{port}/metrics")

    def test_start_after_stop_does_nothing(self, registry: CollectorRegistry) -> None:
        server = ExpositionServer("127.0.0.1", 0, "/metrics", registry)
        server.stop(timeout=0.1)
        server.start()
        assert server._thread is None  # noqa: SLF001

    def test_bound_port_raises_oserror(self, registry: CollectorRegistry) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            sock.listen()
            with pytest.raises(OSError):
                ExpositionServer("127.0.0.1", sock.getsockname()[1], "/metrics", registry)

    def test_gzip_on_request(self, server: ExpositionServer) -> None:
        response = httpx.get(
            f"http://127.0.0.1:{server.port}/metrics",
            headers={"Accept-Encoding": "gzip"},
        )
        assert response.headers["content-encoding"] == "gzip"
        assert 'image_push_total{op="push"} 3.0' in response.text

    def test_name_filter(self, server: ExpositionServer) -> None:
        response = httpx.get(
            f"http://127.0.0.1:{server.port}/metrics",
            params={"name[]": "image_push_total"},
        )
        assert response.status_code == 200
        assert "image_push_total" in response.text
        assert "image_pull_total" not in response.text


# ---------------------------------------------------------------------------
# Shutdown under hung scrapes
# ---------------------------------------------------------------------------


class TestBoundedStop:
    def test_stop_does_not_wait_for_hung_scrape(self) -> None:
        release = threading.Event()
        collector = _HangingCollector(release)
        registry = CollectorRegistry()
        registry.register(collector)  # type: ignore[arg-type]
        server = ExpositionServer("127.0.0.1", 0, "/metrics", registry)
        server.start()
        url = f"http://127.0.0.1:{server.port}/metrics"
        failures: list[Exception] = []

        def scrape() -> None:
            try:
                httpx.get(url, timeout=15.0)
            except httpx.HTTPError as exc:
                failures.append(exc)

        client = threading.Thread(target=scrape, daemon=True)
        client.start()
        try:
            assert collector.entered.wait(5.0)
            started = time.monotonic()
            assert server.stop(timeout=2.0) is True
            assert time.monotonic() - started < 2.0
            with pytest.raises(httpx.ConnectError):
                httpx.get(url)
        finally:
            release.set()
            client.join(5.0)

    def test_stop_reports_timeout(self, registry: CollectorRegistry, monkeypatch: pytest.MonkeyPatch) -> None:
        server = ExpositionServer("127.0.0.1", 0, "/metrics", registry)
        server.start()
        port = server.port
        release = threading.Event()
        real_shutdown = server._httpd.shutdown  # noqa: SLF001
        monkeypatch.setattr(server._httpd, "shutdown", lambda: release.wait(10.0))  # noqa: SLF001
        try:
            started = time.monotonic()
            assert server.stop(timeout=0.2) is False
            assert time.monotonic() - started < 2.0
            with pytest.raises(httpx.ConnectError):
                httpx.get(f"http://127.0.0.1:{port}/metrics")
        finally:
            release.set()
            real_shutdown()
