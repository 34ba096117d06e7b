"""Cross-origin headers for the dashboard API."""

from __future__ import annotations

from typing import Dict, Optional

from flask import Flask, Response, request

from .settings import CorsSettings


def _merge_vary(current: Optional[str], value: str) -> str:
    parts = [part.strip() for part in (current or "").split(",") if part.strip()]
    if value not in parts:
        parts.append(value)
    return ", ".join(parts)


def cors_headers(
    cors: CorsSettings, origin: Optional[str], requested_headers: Optional[str] = None
) -> Dict[str, str]:
    """Headers to attach for ``origin``; empty when the origin is not allowed."""

    if not origin:
        return {}
    wildcard = "*" in cors.allow_origins
    if not wildcard and origin not in cors.allow_origins:
        return {}

    headers = {
        "Access-Control-Allow-Origin": "*" if wildcard else origin,
        "Access-Control-Allow-Methods": ", ".join(cors.allow_methods),
        "Access-Control-Max-Age": str(cors.max_age),
    }
    allow_headers = requested_headers or ", ".join(cors.allow_headers)
    if allow_headers:
        headers["Access-Control-Allow-Headers"] = allow_headers
    return headers


def install_cors(app: Flask, cors: CorsSettings) -> None:
    """Answer preflight requests and decorate every response for allowed origins."""

    def _decorate(response: Response) -> Response:
        headers = cors_headers(
            cors,
            request.headers.get("Origin"),
            request.headers.get("Access-Control-Request-Headers"),
        )
        if not headers:
            return response
        response.headers.update(headers)
        if headers["Access-Control-Allow-Origin"] != "*":
            response.headers["Vary"] = _merge_vary(response.headers.get("Vary"), "Origin")
        return response

    @app.before_request
    def _preflight():
        if request.method == "OPTIONS":
            return _decorate(app.make_response(("", 204)))
        return None

    app.after_request(_decorate)
