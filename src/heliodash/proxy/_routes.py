"""Route table and header policy of the proxy relay.

Route resolution is a pure function of the request path and query string,
so it can be tested without a server.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

HELIOVIEWER_API = "https://api.helioviewer.org/v2"
SWPC = "https://services.swpc.noaa.gov"
LASCO_DATA = "https://soho.nascom.nasa.gov/data/"
HMI_LATEST = "https://sdo.gsfc.nasa.gov/assets/img/latest/latest_1024_HMIB.jpg"
ENLIL_LISTING = "https://services.swpc.noaa.gov/images/animations/enlil/"
HEK_SEARCH = "https://www.lmsal.com/hek/her"
NEWS_SEARCH = "https://news.google.com/rss/search"

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

IMAGE_MAX_AGE = 900
JSON_MAX_AGE = 60
DEFAULT_MAX_AGE = 300

# Request headers that describe the client connection, not the resource.
HOP_BY_HOP_HEADERS: frozenset[str] = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "trailers",
        "transfer-encoding",
        "upgrade",
        "host",
        "content-length",
    }
)

# The relay returns decoded bodies and sets its own CORS and caching policy.
_REPLACED_RESPONSE_HEADERS: frozenset[str] = (
    HOP_BY_HOP_HEADERS
    | {"content-encoding", "cache-control"}
    | {key.lower() for key in CORS_HEADERS}
)

_Target = Callable[[str, str], str]


def _query_suffix(query: str) -> str:
    query = query.lstrip("?")
    return f"?{query}" if query else ""


def _flare_events(rest: str, query: str) -> str:
    day = rest.rsplit("/", 1)[-1].replace(".txt", "", 1)
    return f"{SWPC}/text/{day}events.txt"


# (prefix, builder receiving the path after the prefix and the query)
ROUTES: tuple[tuple[str, _Target], ...] = (
    ("/api/helioviewer", lambda rest, query: HELIOVIEWER_API + rest + _query_suffix(query)),
    ("/api/noaa/", lambda rest, query: f"{SWPC}/{rest}{_query_suffix(query)}"),
    ("/api/flare-events/", _flare_events),
    ("/api/lasco/", lambda rest, query: LASCO_DATA + rest),
    ("/api/hmi/", lambda rest, query: HMI_LATEST),
    ("/api/enlil/", lambda rest, query: ENLIL_LISTING),
    ("/api/hek/", lambda rest, query: HEK_SEARCH + _query_suffix(query)),
    ("/api/news", lambda rest, query: NEWS_SEARCH + _query_suffix(query)),
)


def resolve_upstream(path: str, query: str = "") -> str | None:
    """Map a proxy request onto its upstream URL.

    Prefixes are tried in table order; the first match wins.

    Args:
        path: Request path, e.g. ``/api/noaa/products/noaa-planetary-k-index.json``.
        query: Raw query string, with or without a leading ``?``.

    Returns:
        The upstream URL, or None if no prefix matches.

    Examples:
        ```python
        resolve_upstream("/api/flare-events/20240209.txt")
        # 'https://services.swpc.noaa.gov/text/20240209events.txt'
        ```
    """
    for prefix, build in ROUTES:
        if path.startswith(prefix):
            return build(path[len(prefix):], query)
    return None


def cache_control_for(content_type: str | None) -> str:
    """Return the ``Cache-Control`` value for an upstream content type."""
    content_type = (content_type or "").lower()
    if "image" in content_type:
        max_age = IMAGE_MAX_AGE
    elif "json" in content_type:
        max_age = JSON_MAX_AGE
    else:
        max_age = DEFAULT_MAX_AGE
    return f"public, max-age={max_age}"


def forward_request_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Client headers to send upstream, minus connection-level ones."""
    return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP_HEADERS}


def relay_response_headers(headers: Mapping[str, str], content_type: str | None) -> dict[str, str]:
    """Upstream headers to return, with CORS and caching applied."""
    relayed = {k: v for k, v in headers.items() if k.lower() not in _REPLACED_RESPONSE_HEADERS}
    relayed.update(CORS_HEADERS)
    relayed["Cache-Control"] = cache_control_for(content_type)
    return relayed
