"""
Async Redis client wrapper.

Purpose:
- Own the single long-lived Redis handle for the process (opened on startup,
  closed on shutdown)
- Expose only the hash / list / key commands the booking tables need

Unlike a cache, every record lives here, so command errors are NOT swallowed:
they propagate to the route handlers, which turn them into 500 responses.

Usage:
- client = RedisClient(settings.REDIS_URL); await client.connect()
- await client.hset("driver:123", {"name": "A"})
- await client.lrange("drivers")
"""
import logging
from typing import Optional
import redis.asyncio as redis

logger = logging.getLogger(__name__)


class StoreUnavailable(RuntimeError):
    """Raised when a command is issued before connect() or after disconnect()."""


class RedisClient:
    """Async Redis client wrapper."""

    def __init__(self, url: str = "redis://localhost:6379/0", client: Optional[redis.Redis] = None):
        self.url = url
        self.redis: Optional[redis.Redis] = client

    async def connect(self):
        """Initialize the async Redis connection (no-op if a client was injected)."""
        if self.redis is None:
            logger.info("Creating Redis client for URL=%s", self.url)
            self.redis = redis.Redis.from_url(self.url, encoding="utf-8", decode_responses=True)
        try:
            await self.redis.ping()
            logger.info("Redis connected successfully")
        except Exception as e:
            # keep the handle; commands will fail (and surface as 500s) until Redis is reachable
            logger.error("Redis error on connect: %s", e)

    async def disconnect(self):
        """Close Redis connection."""
        if self.redis is not None:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    def _conn(self) -> redis.Redis:
        if self.redis is None:
            raise StoreUnavailable("Redis client is not connected")
        return self.redis

    async def ping(self) -> bool:
        return bool(await self._conn().ping())

    # ------------- HASHES -------------
    async def hset(self, key: str, mapping: dict[str, str]) -> int:
        return await self._conn().hset(key, mapping=mapping)

    async def hgetall(self, key: str) -> dict[str, str]:
        return await self._conn().hgetall(key)

    # ------------- LISTS -------------
    async def lpush(self, key: str, value: str) -> int:
        return await self._conn().lpush(key, value)

    async def lrange(self, key: str, start: int = 0, end: int = -1) -> list[str]:
        return await self._conn().lrange(key, start, end)

    async def lrem(self, key: str, value: str, count: int = 0) -> int:
        """Remove occurrences of value (count=0 removes all of them)."""
        return await self._conn().lrem(key, count, value)

    # ------------- KEYS -------------
    async def delete(self, key: str) -> int:
        return await self._conn().delete(key)
