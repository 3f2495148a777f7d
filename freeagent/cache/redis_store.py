"""Redis-backed cache store.

Lets several processes share one cache. Values are stored as JSON, so reads
return plain JSON data; ``ResourceCache`` re-validates them into records with
a pydantic ``TypeAdapter``. Expiry is delegated to Redis via ``PX``.
"""

import json
from datetime import timedelta
from typing import Any, Tuple

from pydantic_core import to_json
from redis.asyncio import Redis
from redis.exceptions import RedisError

from freeagent.core.logging import get_logger

logger = get_logger(__name__)


class RedisCacheStore:
    """Cache store on top of ``redis.asyncio``.

    Redis failures are logged and treated as a miss (reads) or a no-op
    (writes and removals); the cache is an optimisation and an outage must
    not break API calls.

    Example:
        ```python
        redis = Redis.from_url("redis://localhost:6379/0")
        store = RedisCacheStore(redis)
        client = FreeAgentClient(access_token="...", cache=store)
        ```
    """

    DEFAULT_NAMESPACE = "freeagent"

    def __init__(self, redis: Redis, namespace: str = DEFAULT_NAMESPACE):
        self.redis = redis
        self.namespace = namespace

    def _redis_key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    async def get(self, key: str) -> Tuple[Any, bool]:
        try:
            cached = await self.redis.get(self._redis_key(key))
        except (RedisError, OSError) as e:
            logger.warning(f"Cache get failed for {key}: {e}")
            return None, False

        if cached is None:
            return None, False
        try:
            return json.loads(cached), True
        except ValueError as e:
            logger.warning(f"Discarding undecodable cache entry {key}: {e}")
            return None, False

    async def set(self, key: str, value: Any, ttl: timedelta) -> None:
        ttl_ms = int(ttl.total_seconds() * 1000)
        if ttl_ms <= 0:
            # Already expired; make sure no older value lingers.
            await self.remove(key)
            return

        try:
            await self.redis.set(self._redis_key(key), to_json(value), px=ttl_ms)
        except (RedisError, OSError) as e:
            logger.warning(f"Cache set failed for {key}: {e}")

    async def remove(self, key: str) -> None:
        try:
            await self.redis.delete(self._redis_key(key))
        except (RedisError, OSError) as e:
            logger.warning(f"Cache remove failed for {key}: {e}")

    async def remove_matching(self, pattern: str) -> None:
        match = self._redis_key(pattern)
        try:
            keys = []
            async for key in self.redis.scan_iter(match=match):
                keys.append(key)
            if keys:
                await self.redis.delete(*keys)
        except (RedisError, OSError) as e:
            logger.warning(f"Cache remove failed for {match}: {e}")

    async def clear(self) -> None:
        pattern = f"{self.namespace}:*"
        try:
            keys = []
            async for key in self.redis.scan_iter(match=pattern):
                keys.append(key)
            if keys:
                await self.redis.delete(*keys)
        except (RedisError, OSError) as e:
            logger.warning(f"Cache clear failed for {pattern}: {e}")
