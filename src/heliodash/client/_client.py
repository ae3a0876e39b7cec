"""Async HTTP client for the space-weather feeds.

Every feed is fetched through the proxy relay and handed to its parser.
Network and HTTP errors propagate to the caller; the expensive listings
(OVATION grid, ENLIL frames, solar imagery) are kept in a TTL cache.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any

import httpx

from heliodash.cache import TtlCache
from heliodash.client._feeds import (
    ENLIL_IMAGE_BASE_URL,
    Feed,
    flare_events_day,
    hek_params,
    news_params,
)
from heliodash.config import (
    ENLIL_CACHE_TTL,
    OVATION_CACHE_TTL,
    SOLAR_FRAMES_CACHE_TTL,
    get_proxy_url,
    get_request_timeout,
)
from heliodash.parsers import (
    AIA_304_SOURCE_ID,
    SOLAR_FRAME_COUNT,
    SOLAR_FRAME_INTERVAL,
    ActiveRegion,
    AuroraGrid,
    FlareEvent,
    FlareProbabilities,
    GoesSeries,
    NewsArticle,
    parse_active_regions,
    parse_closest_image,
    parse_enlil_listing,
    parse_flare_events,
    parse_flare_probabilities,
    parse_goes_magnetometer,
    parse_goes_xrays,
    parse_hemispheric_power,
    parse_kp_index,
    parse_magnetic_field,
    parse_news,
    parse_ovation,
    parse_plasma,
    parse_proton_flux,
    solar_frame_times,
)
from heliodash.parsers._common import load_json
from heliodash.refresh import gather_all
from heliodash.series import ImageFrame, ImageFrameSet, Series

logger = logging.getLogger(__name__)


def _iso_millis(moment: datetime) -> str:
    """Format *moment* as UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    stamp = moment.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


class HelioClient:
    """Space-weather feed client.

    Usable as an async context manager; the underlying connection pool is
    closed on exit.

    Args:
        base_url: Proxy base URL. Defaults to :func:`~heliodash.config.get_proxy_url`.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``
            in tests).
        timeout: Request timeout in seconds. Defaults to
            :func:`~heliodash.config.get_request_timeout`.
        cache: Cache for expensive feeds. A private one is created if
            omitted.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
        cache: TtlCache | None = None,
    ) -> None:
        self._base_url = (base_url or get_proxy_url()).rstrip("/")
        self._timeout = timeout if timeout is not None else get_request_timeout()
        self._cache = cache if cache is not None else TtlCache()
        self._client = httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> HelioClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    @property
    def base_url(self) -> str:
        """Proxy base URL, without a trailing slash."""
        return self._base_url

    @property
    def cache(self) -> TtlCache:
        """Cache shared by the cached feeds."""
        return self._cache

    # ========================================
    # Generic requests
    # ========================================

    def url(self, feed: Feed | str, **path_args: str) -> str:
        """Return the absolute URL of *feed* (or a proxy-relative path)."""
        path = feed.path(**path_args) if isinstance(feed, Feed) else feed
        if not path.startswith("/"):
            path = "/" + path
        return f"{self._base_url}{path}"

    async def fetch_text(
        self,
        feed: Feed | str,
        params: Mapping[str, Any] | None = None,
        **path_args: str,
    ) -> str:
        """GET a feed and return the response body as text.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.TransportError: On a network failure.
        """
        response = await self._execute_get(self.url(feed, **path_args), params)
        return response.text

    async def fetch_json(
        self,
        feed: Feed | str,
        params: Mapping[str, Any] | None = None,
        **path_args: str,
    ) -> Any:
        """GET a feed and decode its JSON body.

        A body that is not valid JSON yields None, which every parser
        treats as an empty payload.

        Raises:
            httpx.HTTPStatusError: On a non-2xx response.
            httpx.TransportError: On a network failure.
        """
        text = await self.fetch_text(feed, params, **path_args)
        return load_json(text)

    async def _execute_get(
        self, url: str, params: Mapping[str, Any] | None = None
    ) -> httpx.Response:
        """Execute an HTTP GET request and check its status."""
        logger.debug("GET %s", url)
        response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response

    # ========================================
    # Solar wind and geomagnetic feeds
    # ========================================

    async def fetch_magnetic_field(self) -> Series:
        """Interplanetary magnetic field (Bx, By, Bz, Bt), last 3 days."""
        return parse_magnetic_field(await self.fetch_json(Feed.MAGNETIC_FIELD))

    async def fetch_plasma(self) -> Series:
        """Solar-wind density, speed and temperature, last 3 days."""
        return parse_plasma(await self.fetch_json(Feed.PLASMA))

    async def fetch_kp_index(self) -> Series:
        """Planetary Kp index."""
        return parse_kp_index(await self.fetch_json(Feed.KP_INDEX))

    async def fetch_goes_magnetometer(self) -> GoesSeries:
        """GOES Hp magnetometer readings from both satellites."""
        primary, secondary = await gather_all(
            self.fetch_json(Feed.MAGNETOMETER_PRIMARY),
            self.fetch_json(Feed.MAGNETOMETER_SECONDARY),
        )
        return parse_goes_magnetometer(primary, secondary)

    async def fetch_hemispheric_power(self) -> Series:
        """Aurora hemispheric power nowcast (north/south, GW)."""
        return parse_hemispheric_power(await self.fetch_text(Feed.HEMISPHERIC_POWER))

    async def fetch_ovation(self) -> AuroraGrid:
        """OVATION aurora grid, cached for :data:`~heliodash.config.OVATION_CACHE_TTL`."""

        async def fetch() -> AuroraGrid:
            grid = parse_ovation(await self.fetch_json(Feed.OVATION))
            logger.info("Fetched OVATION grid with %d visible cells", len(grid))
            return grid

        return await self._cache.get_or_fetch(Feed.OVATION, OVATION_CACHE_TTL, fetch)

    # ========================================
    # Solar activity feeds
    # ========================================

    async def fetch_proton_flux(self) -> Series:
        """GOES integral proton flux (>=10 MeV), last 3 days."""
        return parse_proton_flux(await self.fetch_json(Feed.PROTON_FLUX))

    async def fetch_xray_flux(self) -> GoesSeries:
        """GOES X-ray flux from both satellites.

        Both satellites are fetched concurrently; if either request fails
        the other is cancelled and the error is raised.
        """
        primary, secondary = await gather_all(
            self.fetch_json(Feed.XRAY_PRIMARY),
            self.fetch_json(Feed.XRAY_SECONDARY),
        )
        return parse_goes_xrays(primary, secondary)

    async def fetch_flare_probabilities(self) -> FlareProbabilities:
        """Maximum C/M/X flare probabilities from the 3-day forecast."""
        return parse_flare_probabilities(await self.fetch_text(Feed.FLARE_PROBABILITIES))

    async def fetch_flare_events(self, day: date) -> list[FlareEvent]:
        """M- and X-class flares from the events bulletin of *day*."""
        text = await self.fetch_text(Feed.FLARE_EVENTS, day=flare_events_day(day))
        return parse_flare_events(text, day)

    async def fetch_enlil_frames(self) -> ImageFrameSet:
        """Frames of the latest ENLIL run, cached for
        :data:`~heliodash.config.ENLIL_CACHE_TTL`.
        """

        async def fetch() -> ImageFrameSet:
            frames = parse_enlil_listing(
                await self.fetch_text(Feed.ENLIL), ENLIL_IMAGE_BASE_URL
            )
            logger.info("Fetched ENLIL run %r with %d frames", frames.run, len(frames))
            return frames

        return await self._cache.get_or_fetch(Feed.ENLIL, ENLIL_CACHE_TTL, fetch)

    async def fetch_active_regions(self, now: datetime | None = None) -> list[ActiveRegion]:
        """On-disk NOAA active regions reported in the 24 h before *now*."""
        now = now or datetime.now(timezone.utc)
        payload = await self.fetch_json(Feed.ACTIVE_REGIONS, hek_params(now))
        return parse_active_regions(payload)

    # ========================================
    # Imagery and news
    # ========================================

    async def fetch_closest_image(
        self, when: datetime, source_id: int = AIA_304_SOURCE_ID
    ) -> ImageFrame | None:
        """The Helioviewer image closest to *when*, or None if there is none."""
        payload = await self.fetch_json(
            Feed.CLOSEST_IMAGE, {"date": _iso_millis(when), "sourceId": source_id}
        )
        return parse_closest_image(payload, self.url("/helioviewer"))
    async def fetch_solar_frames(
        self,
        now: datetime | None = None,
        count: int = SOLAR_FRAME_COUNT,
        interval: timedelta = SOLAR_FRAME_INTERVAL,
    ) -> ImageFrameSet:
        """Evenly spaced AIA 304 frames ending at *now*, oldest first.

        Lookups run concurrently; any failure fails the whole set. The
        result is cached per ``(count, interval)`` for
        :data:`~heliodash.config.SOLAR_FRAMES_CACHE_TTL`.
        """
        now = now or datetime.now(timezone.utc)

        async def fetch() -> ImageFrameSet:
            times = solar_frame_times(now, count, interval)
            found = await gather_all(*(self.fetch_closest_image(t) for t in times))
            frames = tuple(frame for frame in found if frame is not None)
            logger.info("Fetched %d of %d solar frames", len(frames), len(times))
            run = frames[0].run if frames else None
            return ImageFrameSet(run=run, frames=frames)

        key = ("solar_frames", count, interval)
        return await self._cache.get_or_fetch(key, SOLAR_FRAMES_CACHE_TTL, fetch)

    async def fetch_news(self, query: str | None = None) -> list[NewsArticle]:
        """Latest space-weather news articles, newest first."""
        params = news_params(query) if query else news_params()
        return parse_news(await self.fetch_text(Feed.NEWS, params))
