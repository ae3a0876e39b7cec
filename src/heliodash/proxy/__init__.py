"""Proxy relay for the upstream space-weather services.

Maps ``/api/<prefix>/...`` requests onto fixed upstream hosts, adding
CORS and caching headers.
"""

from heliodash.proxy._app import create_app
from heliodash.proxy._routes import (
    CORS_HEADERS,
    ROUTES,
    cache_control_for,
    forward_request_headers,
    relay_response_headers,
    resolve_upstream,
)

__all__ = [
    "CORS_HEADERS",
    "ROUTES",
    "cache_control_for",
    "create_app",
    "forward_request_headers",
    "relay_response_headers",
    "resolve_upstream",
]
