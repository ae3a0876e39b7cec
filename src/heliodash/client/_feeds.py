"""Feed endpoint enum.

Paths are relative to the proxy base URL (see :mod:`heliodash.config`).
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from enum import Enum

ENLIL_IMAGE_BASE_URL: str = "https://services.swpc.noaa.gov/images/animations/enlil/"
"""Frame images are linked directly; the proxy only relays the listing."""

HEK_SEARCH_BOX_ARCSEC: int = 1200
HEK_RESULT_LIMIT: int = 100
HEK_LOOKBACK: timedelta = timedelta(hours=24)

_FEED_PATHS: dict[str, str] = {
    "magnetic_field": "/noaa/products/solar-wind/mag-3-day.json",
    "plasma": "/noaa/products/solar-wind/plasma-3-day.json",
    "kp_index": "/noaa/products/noaa-planetary-k-index.json",
    "proton_flux": "/noaa/json/goes/primary/integral-protons-3-day.json",
    "xray_primary": "/noaa/json/goes/primary/xrays-1-day.json",
    "xray_secondary": "/noaa/json/goes/secondary/xrays-1-day.json",
    "magnetometer_primary": "/noaa/json/goes/primary/magnetometers-1-day.json",
    "magnetometer_secondary": "/noaa/json/goes/secondary/magnetometers-1-day.json",
    "flare_probabilities": "/noaa/text/3-day-solar-geomag-predictions.txt",
    "flare_events": "/flare-events/{day}.txt",
    "enlil": "/enlil/",
    "active_regions": "/hek/",
    "hemispheric_power": "/noaa/text/aurora-nowcast-hemi-power.txt",
    "ovation": "/noaa/json/ovation_aurora_latest.json",
    "closest_image": "/helioviewer/getClosestImage/",
    "news": "/news",
}


class Feed(Enum):
    """Upstream feed reachable through the proxy."""

    MAGNETIC_FIELD = "magnetic_field"
    PLASMA = "plasma"
    KP_INDEX = "kp_index"
    PROTON_FLUX = "proton_flux"
    XRAY_PRIMARY = "xray_primary"
    XRAY_SECONDARY = "xray_secondary"
    MAGNETOMETER_PRIMARY = "magnetometer_primary"
    MAGNETOMETER_SECONDARY = "magnetometer_secondary"
    FLARE_PROBABILITIES = "flare_probabilities"
    FLARE_EVENTS = "flare_events"
    ENLIL = "enlil"
    ACTIVE_REGIONS = "active_regions"
    HEMISPHERIC_POWER = "hemispheric_power"
    OVATION = "ovation"
    CLOSEST_IMAGE = "closest_image"
    NEWS = "news"

    def path(self, **kwargs: str) -> str:
        """Return the proxy-relative path, formatting any placeholders.

        Raises:
            KeyError: If a placeholder of the path is not supplied.
        """
        return _FEED_PATHS[self.value].format(**kwargs)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Feed.{self.name}"


def flare_events_day(day: date) -> str:
    """Return the ``YYYYMMDD`` bulletin stem for *day*."""
    return day.strftime("%Y%m%d")


def _hek_time(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S")


def hek_params(now: datetime) -> dict[str, str | int]:
    """Query parameters for the active-region search ending at *now*."""
    return {
        "cmd": "search",
        "type": "column",
        "event_type": "ar",
        "event_starttime": _hek_time(now - HEK_LOOKBACK),
        "event_endtime": _hek_time(now),
        "event_coordsys": "helioprojective",
        "x1": -HEK_SEARCH_BOX_ARCSEC,
        "x2": HEK_SEARCH_BOX_ARCSEC,
        "y1": -HEK_SEARCH_BOX_ARCSEC,
        "y2": HEK_SEARCH_BOX_ARCSEC,
        "cosec": 2,
        "result_limit": HEK_RESULT_LIMIT,
        "return": "ar_noaanum,hpc_x,hpc_y",
    }


def news_params(query: str = "space weather solar storm") -> dict[str, str]:
    """Query parameters for the news RSS search."""
    return {"q": query, "hl": "en-US", "gl": "US", "ceid": "US:en"}
