"""Cache-aside layer: stores and the per-resource accessor."""

from typing import Optional

from redis.asyncio import Redis

from freeagent.cache.accessor import ResourceCache, canonical_filters, canonical_value
from freeagent.cache.redis_store import RedisCacheStore
from freeagent.cache.store import CacheEntry, CacheStore, InMemoryCacheStore
from freeagent.core.config import FreeAgentSettings


def create_cache_store(settings: Optional[FreeAgentSettings] = None) -> CacheStore:
    """Build the cache store described by settings.

    Redis when ``redis_url`` is set, otherwise a fresh in-memory store.
    """
    if settings is not None and settings.redis_url:
        return RedisCacheStore(Redis.from_url(settings.redis_url))
    return InMemoryCacheStore()


__all__ = [
    "CacheEntry",
    "CacheStore",
    "InMemoryCacheStore",
    "RedisCacheStore",
    "ResourceCache",
    "canonical_filters",
    "canonical_value",
    "create_cache_store",
]
