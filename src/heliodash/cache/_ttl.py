"""Keyed in-memory cache with per-key time-to-live.

Entries are created on the first successful fetch and discarded once
``now - fetched_at >= ttl``. While a fetch for a key is outstanding, other
callers asking for that key wait on the same pending future instead of
starting a second fetch.

The cache is meant for a single asyncio event loop and uses no locks;
state only changes between suspension points.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Hashable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value and its freshness metadata.

    Args:
        value: The cached value.
        fetched_at: Clock reading when the value was stored [s].
        ttl: Lifetime of the entry [s].
    """

    value: T
    fetched_at: float
    ttl: float

    def age(self, now: float) -> float:
        """Return the entry's age in seconds at clock reading *now*."""
        return max(0.0, now - self.fetched_at)

    def is_live(self, now: float) -> bool:
        """Return True while the entry is younger than its TTL."""
        return now - self.fetched_at < self.ttl


class TtlCache:
    """Per-key TTL cache with in-flight fetch coalescing.

    Args:
        clock: Zero-argument callable returning seconds. Defaults to
            :func:`time.monotonic`; inject a fake clock in tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[Hashable, CacheEntry[Any]] = {}
        self._pending: dict[Hashable, asyncio.Future[Any]] = {}

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for entry in self._entries.values() if entry.is_live(now))

    def __contains__(self, key: Hashable) -> bool:
        return self.entry(key) is not None

    def __repr__(self) -> str:
        return f"TtlCache(entries={len(self._entries)}, pending={len(self._pending)})"

    def entry(self, key: Hashable) -> CacheEntry[Any] | None:
        """Return the live entry for *key*, dropping it if it has expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_live(self._clock()):
            del self._entries[key]
            return None
        return entry

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the live value for *key*, or *default*."""
        entry = self.entry(key)
        return default if entry is None else entry.value

    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        """Store *value* under *key* for *ttl* seconds."""
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self._entries[key] = CacheEntry(value, self._clock(), float(ttl))

    def invalidate(self, key: Hashable) -> None:
        """Drop the entry for *key*, if any. Pending fetches are unaffected."""
        self._entries.pop(key, None)

    def clear(self) -> None:
        """Drop every stored entry."""
        self._entries.clear()

    def is_pending(self, key: Hashable) -> bool:
        """Return True while a fetch for *key* is outstanding."""
        return key in self._pending

    async def get_or_fetch(
        self,
        key: Hashable,
        ttl: float,
        fetcher: Callable[[], Awaitable[T]],
    ) -> T:
        """Return the cached value for *key*, fetching it on a miss.

        A live entry is returned without calling *fetcher*. On a miss the
        first caller runs *fetcher* and stores its result; callers arriving
        while that fetch is outstanding await the same result. If the fetch
        raises, nothing is stored and every waiter receives the exception.

        Args:
            key: Cache key.
            ttl: Lifetime of a newly fetched value [s].
            fetcher: Zero-argument coroutine function producing the value.

        Returns:
            The cached or freshly fetched value.

        Raises:
            ValueError: If *ttl* is not positive.
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")

        entry = self.entry(key)
        if entry is not None:
            return entry.value

        pending = self._pending.get(key)
        if pending is not None:
            return await asyncio.shield(pending)

        future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._pending[key] = future
        try:
            value = await fetcher()
            self.set(key, value, ttl)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # mark retrieved so an unawaited failure is not reported at GC
            future.exception()
            raise
        else:
            future.set_result(value)
            logger.debug("Cached %r for %.0f s", key, ttl)
            return value
        finally:
            self._pending.pop(key, None)
