"""FastAPI application relaying dashboard requests to the upstream feeds.

Run with any ASGI server, for example::

    uvicorn --factory heliodash.proxy:create_app --port 8787
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from heliodash.config import get_request_timeout
from heliodash.proxy._routes import (
    CORS_HEADERS,
    forward_request_headers,
    relay_response_headers,
    resolve_upstream,
)

logger = logging.getLogger(__name__)

RELAYED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    upstream_transport: httpx.AsyncBaseTransport | None = None,
    *,
    timeout: float | None = None,
) -> FastAPI:
    """Build the proxy relay application.

    Args:
        upstream_transport: Optional httpx transport used for upstream
            requests (e.g. ``httpx.MockTransport`` in tests).
        timeout: Upstream request timeout in seconds. Defaults to
            :func:`~heliodash.config.get_request_timeout`.

    Returns:
        A FastAPI app with a single catch-all relay route.
    """
    upstream = httpx.AsyncClient(
        timeout=timeout if timeout is not None else get_request_timeout(),
        follow_redirects=True,
        transport=upstream_transport,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await upstream.aclose()

    app = FastAPI(title="heliodash proxy", lifespan=lifespan)
    app.state.upstream = upstream

    @app.api_route("/{path:path}", methods=RELAYED_METHODS)
    async def relay(request: Request, path: str) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        target = resolve_upstream(request.url.path, request.url.query)
        if target is None:
            return PlainTextResponse("Not found", status_code=404, headers=CORS_HEADERS)

        try:
            reply = await upstream.request(
                request.method,
                target,
                headers=forward_request_headers(request.headers),
                content=await request.body(),
            )
        except httpx.HTTPError as exc:
            logger.error("Proxy error for %s: %s", target, exc)
            return JSONResponse(
                {"error": "Proxy error", "message": str(exc)},
                status_code=500,
                headers=CORS_HEADERS,
            )

        logger.debug("%s %s -> %d", request.method, target, reply.status_code)
        return Response(
            content=reply.content,
            status_code=reply.status_code,
            headers=relay_response_headers(reply.headers, reply.headers.get("content-type")),
        )

    return app
