"""HTTP handlers for the cache API."""

from __future__ import annotations

import json
from typing import Tuple

from flask import Flask, Response, jsonify, request

from shardcache.service import Service

SERVICE_KEY = "shardcache.service"


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid literal {name}")


def _parse_set_request(body: bytes) -> Tuple[str, int, bytes]:
    """Return key, ttl and the compact JSON text of the value; raise ValueError if invalid."""
    data = json.loads(body.decode("utf-8"), parse_constant=_reject_constant) or {}
    if not isinstance(data, dict):
        raise ValueError("expected an object")
    fields = {name.lower(): value for name, value in data.items()}
    key = fields.get("key") or ""
    ttl = fields.get("ttl") or 0
    if not isinstance(key, str):
        raise ValueError("key must be a string")
    if isinstance(ttl, bool) or not isinstance(ttl, int) or not 0 <= ttl < 2**64:
        raise ValueError("ttl must be a non-negative integer")
    value = b""
    if "value" in fields:
        value = json.dumps(fields["value"], separators=(",", ":"), ensure_ascii=False).encode()
    return key, ttl, value


def _error(status: int, message: str) -> Tuple[Response, int]:
    return jsonify({"error": message}), status


def create_app(service: Service) -> Flask:
    """Build the Flask application that serves ``service``."""
    app = Flask(__name__)
    app.extensions[SERVICE_KEY] = service

    @app.post("/api/v1/set")
    def set_value():
        try:
            key, ttl, value = _parse_set_request(request.get_data())
        except ValueError:
            return _error(400, "Invalid JSON")
        if not key:
            return _error(400, "Key required")
        if not value:
            return _error(400, "Value required")
        service.set(key, value, ttl)
        return jsonify({"status": "ok"})

    @app.get("/api/v1/get/<key>")
    def get_value(key: str):
        value = service.get(key)
        if value is None:
            return _error(404, "Key not found")
        return Response(b'{"value":' + value + b"}", mimetype="application/json")

    @app.delete("/api/v1/del/<key>")
    def delete_value(key: str):
        service.delete(key)
        return jsonify({"status": "ok"})

    @app.get("/api/v1/metrics")
    def metrics():
        return jsonify(service.metrics().to_dict())

    @app.get("/health")
    def health():
        return jsonify({"status": "healthy"})

    return app