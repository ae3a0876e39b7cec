"""Module-wide configuration for heliodash.

Provides ``set_proxy_url`` / ``get_proxy_url`` to control the base URL of
the API proxy that every feed is fetched through, and
``set_request_timeout`` / ``get_request_timeout`` for the HTTP timeout.

The proxy URL is resolved in this order:

1. A value set with :func:`set_proxy_url`.
2. The ``HELIODASH_PROXY_URL`` environment variable.
3. :data:`DEFAULT_PROXY_URL`.

Refresh intervals and cache lifetimes used by the dashboard views are
module constants so callers can reference them when building their own
refresh loops.
"""

from __future__ import annotations

import os

_ENV_VAR = "HELIODASH_PROXY_URL"

DEFAULT_PROXY_URL: str = "http://127.0.0.1:8787/api"
"""Proxy base URL used when neither a setting nor the env var is present."""

DEFAULT_REQUEST_TIMEOUT: float = 30.0
"""Default HTTP timeout in seconds."""

FAST_REFRESH_INTERVAL: float = 60.0
"""Refresh interval for fast-moving metrics (solar wind, Kp) in seconds."""

SLOW_REFRESH_INTERVAL: float = 900.0
"""Refresh interval for slow-changing feeds (flares, ENLIL) in seconds."""

OVATION_CACHE_TTL: float = 600.0
"""Lifetime of a cached OVATION aurora grid in seconds."""

SOLAR_FRAMES_CACHE_TTL: float = 300.0
"""Lifetime of a cached solar imagery frame listing in seconds."""

ENLIL_CACHE_TTL: float = 900.0
"""Lifetime of a cached ENLIL frame listing in seconds."""

_proxy_url: str | None = None
_request_timeout: float = DEFAULT_REQUEST_TIMEOUT


def set_proxy_url(url: str | None) -> None:
    """Set the module-wide proxy base URL.

    Passing ``None`` clears the override so the environment variable (or
    the default) applies again.

    Args:
        url: Base URL such as ``"https://proxy.example.org/api"``.

    Raises:
        ValueError: If *url* is not an ``http`` or ``https`` URL.
    """
    global _proxy_url
    if url is None:
        _proxy_url = None
        return
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"Proxy URL must start with http:// or https://, got {url!r}")
    _proxy_url = url.rstrip("/")


def get_proxy_url() -> str:
    """Return the active proxy base URL without a trailing slash.

    Returns:
        The configured URL, ``$HELIODASH_PROXY_URL``, or
        :data:`DEFAULT_PROXY_URL`.
    """
    if _proxy_url is not None:
        return _proxy_url
    env = os.environ.get(_ENV_VAR)
    if env:
        return env.rstrip("/")
    return DEFAULT_PROXY_URL


def set_request_timeout(seconds: float) -> None:
    """Set the module-wide HTTP timeout.

    Args:
        seconds: Timeout in seconds.

    Raises:
        ValueError: If *seconds* is not positive.
    """
    global _request_timeout
    if seconds <= 0:
        raise ValueError(f"Request timeout must be positive, got {seconds}")
    _request_timeout = float(seconds)


def get_request_timeout() -> float:
    """Return the module-wide HTTP timeout in seconds."""
    return _request_timeout
