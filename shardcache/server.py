"""Command-line entry point that runs the cache HTTP server."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from socketserver import ThreadingMixIn
from typing import Optional, Sequence
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from dotenv import load_dotenv
from flask import Flask, Response

from shardcache.config import ConfigError, load
from shardcache.handlers import SERVICE_KEY, create_app
from shardcache.service import Service
from shardcache.types import Config

DEFAULT_PORT = 1100
BODY_LIMIT = 10 * 1024 * 1024

_log = logging.getLogger(__name__)


class _RequestHandler(WSGIRequestHandler):
    timeout = 10.0


class _ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    daemon_threads = True


def build_app(config: Config) -> Flask:
    """Create the service for ``config`` and the application that serves it."""
    app = create_app(Service(config))
    app.config["MAX_CONTENT_LENGTH"] = BODY_LIMIT

    @app.after_request
    def _server_header(response: Response) -> Response:
        response.headers["Server"] = "CacheServer"
        return response

    return app


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Serve until SIGINT or SIGTERM; return the exit status."""
    parser = argparse.ArgumentParser(description="Run the cache server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    load_dotenv(".env")
    try:
        config = load()
    except ConfigError as exc:
        _log.error("Configuration error: %s", exc)
        return 1

    app = build_app(config)
    service: Service = app.extensions[SERVICE_KEY]
    janitor_stop = threading.Event()
    janitor = threading.Thread(target=service.run_janitor, args=(janitor_stop,), daemon=True)
    janitor.start()

    server = None
    try:
        server = make_server(args.host, args.port, app,
                             server_class=_ThreadingWSGIServer, handler_class=_RequestHandler)
    except OSError as exc:
        _log.error("Server error: %s", exc)
    else:
        _log.info("Server starting on %s:%d", args.host, args.port)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        shutdown = threading.Event()
        previous = {sig: signal.signal(sig, lambda *_: shutdown.set())
                    for sig in (signal.SIGINT, signal.SIGTERM)}
        try:
            while not shutdown.wait(0.5):
                pass
        finally:
            for sig, handler in previous.items():
                signal.signal(sig, handler)
        _log.info("Shutdown signal received")

    _log.info("Shutting down gracefully...")
    janitor_stop.set()
    service.stop()
    if server is not None:
        server.shutdown()
        server.server_close()
    janitor.join()
    _log.info("Server stopped")
    return 0 if server is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())