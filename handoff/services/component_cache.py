"""Component cache — Redis-backed TTL cache for fetched components."""

import json
from typing import Optional

import redis.asyncio as aioredis
import structlog
from redis.exceptions import RedisError

from handoff.config import get_settings

logger = structlog.get_logger()

# Default TTL: 5 minutes
COMPONENT_TTL = 300


class ComponentCache:
    """Caches remote component payloads in Redis.

    A cache without a Redis client is a no-op, and Redis failures degrade
    to cache misses so validation never depends on the cache being up.
    """

    def __init__(self, redis_client=None, ttl: int = COMPONENT_TTL):
        self.redis = redis_client
        self.ttl = ttl
        self._prefix = "handoff:component:"

    @property
    def enabled(self) -> bool:
        return self.redis is not None

    def _key(self, component_id: str) -> str:
        return f"{self._prefix}{component_id}"

    async def get(self, component_id: str) -> Optional[dict]:
        """Retrieve a cached component payload."""
        if not self.enabled:
            return None
        try:
            data = await self.redis.get(self._key(component_id))
        except RedisError as e:
            logger.warning("component_cache_unavailable", component_id=component_id, error=str(e))
            return None
        if data is None:
            logger.debug("component_cache_miss", component_id=component_id)
            return None
        logger.debug("component_cache_hit", component_id=component_id)
        return json.loads(data)

    async def set(self, component_id: str, payload: dict) -> None:
        """Store a component payload with the cache TTL."""
        if not self.enabled:
            return
        try:
            await self.redis.setex(self._key(component_id), self.ttl, json.dumps(payload, default=str))
        except RedisError as e:
            logger.warning("component_cache_unavailable", component_id=component_id, error=str(e))

    async def close(self) -> None:
        if self.enabled:
            await self.redis.aclose()


def create_cache(redis_url: Optional[str] = None, ttl: Optional[int] = None) -> ComponentCache:
    """Build a cache from settings; an empty REDIS_URL gives a disabled cache."""
    settings = get_settings()
    url = settings.REDIS_URL if redis_url is None else redis_url
    if not url:
        return ComponentCache()
    client = aioredis.from_url(url, decode_responses=True, encoding="utf-8")
    return ComponentCache(client, ttl=ttl or settings.CACHE_TTL_SECONDS)
