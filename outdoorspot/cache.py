"""Cache management module."""
import json
from typing import Any, Optional

import redis.asyncio as redis

from outdoorspot.config import settings


def make_cache_key(*parts: object) -> str:
    """`make_cache_key("weather", "lake texoma")` -> `"weather:lake texoma"`."""
    return ":".join(str(part) for part in parts)


class CacheManager:
    """A class to manage the Redis cache."""

    def __init__(self, redis_url: str = settings.REDIS_URL):
        """Initialize the CacheManager. No connection is opened until first use."""
        self.redis_url = redis_url
        self.redis = redis.from_url(self.redis_url, encoding="utf-8", decode_responses=True)

    async def get(self, key: str) -> Optional[str]:
        """Get a value from the cache."""
        return await self.redis.get(key)

    async def set(self, key: str, value: str, expire: int = 300):
        """Set a value in the cache."""
        await self.redis.set(key, value, ex=expire)

    async def get_json(self, key: str) -> Optional[Any]:
        """Get and decode a JSON value, None on miss."""
        raw = await self.get(key)
        return json.loads(raw) if raw is not None else None

    async def set_json(self, key: str, value: Any, expire: int = 300):
        """Encode and store a JSON value."""
        await self.set(key, json.dumps(value), expire=expire)

    async def ping(self) -> bool:
        """Check the connection."""
        return await self.redis.ping()

    async def close(self):
        """Close the Redis connection."""
        await self.redis.aclose()


cache_manager = CacheManager()
