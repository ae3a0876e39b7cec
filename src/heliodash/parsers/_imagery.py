"""Helioviewer imagery helpers.

The hero animation is built from ``getClosestImage`` lookups spaced evenly
back from the current time; each lookup returns a small JSON document::

    {"id": "79234567", "date": "2024-02-09 14:29:53", "name": "AIA 304"}

which is turned into a ``downloadImage`` URL.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any
from urllib.parse import urlencode

from heliodash.parsers._common import load_json, parse_timestamp
from heliodash.series import ImageFrame

AIA_304_SOURCE_ID: int = 13
"""Helioviewer source id of SDO/AIA 304 Å (chromosphere)."""

IMAGE_WIDTH: int = 1024
"""Requested image width in pixels."""

SOLAR_FRAME_COUNT: int = 60
SOLAR_FRAME_INTERVAL: timedelta = timedelta(minutes=15)


def solar_frame_times(
    now: datetime,
    count: int = SOLAR_FRAME_COUNT,
    interval: timedelta = SOLAR_FRAME_INTERVAL,
) -> list[datetime]:
    """Return *count* evenly spaced request times ending at *now*, oldest first."""
    return [now - interval * (count - 1 - i) for i in range(count)]


def image_url(base_url: str, image_id: Any, width: int = IMAGE_WIDTH) -> str:
    """Build the ``downloadImage`` URL for a Helioviewer image id."""
    query = urlencode({"id": image_id, "width": width, "type": "jpg"})
    return f"{base_url.rstrip('/')}/downloadImage/?{query}"


def parse_closest_image(
    payload: Any,
    base_url: str,
    width: int = IMAGE_WIDTH,
) -> ImageFrame | None:
    """Turn a ``getClosestImage`` response into an ImageFrame.

    Args:
        payload: JSON text or decoded response.
        base_url: Helioviewer API base (through the proxy).
        width: Requested image width.

    Returns:
        The frame, or None when the response carries no image id.
    """
    data = load_json(payload)
    if not isinstance(data, dict) or data.get("id") in (None, ""):
        return None
    return ImageFrame(
        url=image_url(base_url, data["id"], width),
        timestamp=parse_timestamp(data.get("date")),
        run=data.get("name"),
    )
