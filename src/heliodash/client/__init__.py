"""Async client for the space-weather feeds behind the proxy relay.

Typical usage::

    import asyncio
    from heliodash.client import HelioClient

    async def main():
        async with HelioClient() as client:
            kp = await client.fetch_kp_index()
            print(kp.latest("kp"))

    asyncio.run(main())
"""

from heliodash.client._client import HelioClient
from heliodash.client._feeds import (
    ENLIL_IMAGE_BASE_URL,
    Feed,
    flare_events_day,
    hek_params,
    news_params,
)

__all__ = [
    "ENLIL_IMAGE_BASE_URL",
    "Feed",
    "HelioClient",
    "flare_events_day",
    "hek_params",
    "news_params",
]
