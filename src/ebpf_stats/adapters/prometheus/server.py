"""Prometheus adapter – ExpositionServer.

Serves a ``prometheus_client`` registry on a single route from a background
thread.  The socket is bound when the server is constructed, so a port that
is already taken surfaces as an ``OSError`` before any thread is started.
"""
from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from typing import Any
from wsgiref.simple_server import WSGIRequestHandler

from prometheus_client import CollectorRegistry, make_wsgi_app
from prometheus_client.exposition import ThreadingWSGIServer

from ebpf_stats.observability.logging import get_logger

logger = get_logger(__name__)


class _LoggingHandler(WSGIRequestHandler):
    """Route request logs to structlog at debug level instead of stderr."""

    def log_message(self, format: str, *args: Any) -> None:  # noqa: A002
        logger.debug("metrics.http_request", client=self.client_address[0], request=format % args)


def _single_route(path: str, app: Callable[..., Iterable[bytes]]) -> Callable[..., Iterable[bytes]]:
    """Serve *app* on *path* only; every other path is a 404."""

    def routed(environ: dict[str, Any], start_response: Callable[..., Any]) -> Iterable[bytes]:
        if environ.get("PATH_INFO", "") != path:
            start_response("404 Not Found", [("Content-Type", "text/plain"), ("Content-Length", "0")])
            return [b""]
        return app(environ, start_response)

    return routed


class _ExpositionWSGIServer(ThreadingWSGIServer):
    # server_close() must not join handler threads stuck in a slow collect().
    block_on_close = False


class ExpositionServer:
    """Pull endpoint for an external collector.

    Rendering, content negotiation, gzip and ``name[]`` filtering come from
    :func:`prometheus_client.make_wsgi_app`.
    """

    def __init__(self, host: str, port: int, path: str, registry: CollectorRegistry) -> None:
        self._httpd = _ExpositionWSGIServer((host, port), _LoggingHandler)
        self._httpd.set_app(_single_route(path, make_wsgi_app(registry)))
        self._path = path
        self._thread: threading.Thread | None = None
        self._stopped = False
        self._lock = threading.Lock()

    @property
    def port(self) -> int:
        return self._httpd.server_address[1]

    @property
    def path(self) -> str:
        return self._path

    def start(self) -> None:
        with self._lock:
            if self._stopped or self._thread is not None:
                return
            self._thread = threading.Thread(
                target=self._httpd.serve_forever,
                name=f"metrics-exposition-{self.port}",
                daemon=True,
            )
            self._thread.start()
        logger.info("metrics.server_started", port=self.port, path=self._path)

    def stop(self, timeout: float = 5.0) -> bool:
        """Stop serving and release the socket.

        Safe to call more than once.  In-flight scrapes run on daemon threads
        and are not waited for.  Returns ``False`` if the serving loop did not
        exit within *timeout* seconds; the socket is closed anyway.
        """
        with self._lock:
            if self._stopped:
                return True
            self._stopped = True
            thread = self._thread

        stopped = True
        if thread is not None:
            stopper = threading.Thread(target=self._httpd.shutdown, daemon=True)
            stopper.start()
            stopper.join(timeout)
            if not stopper.is_alive():
                thread.join(timeout)
            stopped = not thread.is_alive()
        self._httpd.server_close()
        if stopped:
            logger.info("metrics.server_stopped", port=self.port)
        else:
            logger.warning("metrics.server_stop_timeout", port=self.port, timeout=timeout)
        return stopped


__all__ = ["ExpositionServer"]
