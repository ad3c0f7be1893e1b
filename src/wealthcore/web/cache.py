"""Result cache for deterministic (seeded) computations.

Redis when a URL is configured and reachable, in-memory TTLCache otherwise.
"""

import hashlib
import json
import logging
from typing import Any

from cachetools import TTLCache

logger = logging.getLogger(__name__)


def make_key(prefix: str, payload: dict[str, Any]) -> str:
    """Stable cache key from a request payload."""
    digest = hashlib.sha256(json.dumps(payload, sort_keys=True, default=str).encode()).hexdigest()
    return f"{prefix}:{digest[:32]}"


class CacheService:
    def __init__(self, redis_client=None, ttl: int = 300, maxsize: int = 256):
        self._redis = redis_client
        self._ttl = ttl
        self._memory = TTLCache(maxsize=maxsize, ttl=ttl)

    @classmethod
    async def create(cls, redis_url: str = "", ttl: int = 300) -> "CacheService":
        """Connect to Redis if configured, otherwise keep results in memory."""
        if not redis_url:
            logger.info("Cache: no Redis URL configured, using in-memory TTLCache")
            return cls(ttl=ttl)
        try:
            import redis.asyncio as aioredis

            client = aioredis.from_url(redis_url, decode_responses=True)
            await client.ping()
            logger.info("Cache: Connected to Redis")
            return cls(redis_client=client, ttl=ttl)
        except Exception as e:
            logger.warning("Cache: Redis unavailable (%s), using in-memory TTLCache", e)
            return cls(ttl=ttl)

    async def get(self, key: str) -> Any | None:
        if self._redis is None:
            return self._memory.get(key)
        try:
            value = await self._redis.get(key)
        except Exception as e:
            logger.warning("Cache get error: %s", e)
            return None
        return json.loads(value) if value is not None else None

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._redis is None:
            self._memory[key] = value
            return
        try:
            await self._redis.setex(key, ttl or self._ttl, json.dumps(value, default=str))
        except Exception as e:
            logger.warning("Cache set error: %s", e)

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.close()

    @property
    def is_redis(self) -> bool:
        return self._redis is not None
