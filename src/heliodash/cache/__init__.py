"""In-memory caching for expensive feed fetches."""

from heliodash.cache._ttl import CacheEntry, TtlCache

__all__ = [
    "CacheEntry",
    "TtlCache",
]
