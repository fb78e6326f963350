"""
Redis-backed snapshot storage.

Provides async Redis operations with:
- Lazy connection on first use
- Optional key prefix so several users can share one instance
- Errors mapped into the StorageError hierarchy
- Operation statistics
"""

import logging
from typing import Any, Optional

import redis
import redis.asyncio as aioredis

from hydration_tracker.exceptions import wrap_external_exception
from hydration_tracker.storage.base import KeyValueStore

logger = logging.getLogger(__name__)


class RedisStore(KeyValueStore):
    """
    Async Redis key-value store.

    Values are stored as plain strings without TTL; snapshots must outlive
    restarts.
    """

    def __init__(self, redis_url: str = "redis://localhost:6379/0", key_prefix: str = "", client: Optional[Any] = None):
        """
        Initialize Redis store.

        Args:
            redis_url: Redis connection URL
            key_prefix: Prepended to every key (e.g. "user:42:")
            client: Pre-built redis.asyncio client (tests)
        """
        self.redis_url = redis_url
        self.key_prefix = key_prefix
        self._client: Optional[Any] = client
        self._stats = {
            "gets": 0,
            "misses": 0,
            "sets": 0,
            "errors": 0,
        }

    async def connect(self) -> None:
        """Establish Redis connection."""
        if self._client is not None:
            return

        try:
            self._client = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                max_connections=10,
            )
            await self._client.ping()
            logger.info(f"✅ Redis connected: {self.redis_url}")
        except redis.RedisError as e:
            self._client = None
            self._stats["errors"] += 1
            raise wrap_external_exception(e, operation="redis_connect")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            try:
                await self._client.aclose()
                logger.info("Redis connection closed")
            except redis.RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self._client = None

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        await self.connect()
        self._stats["gets"] += 1

        try:
            value = await self._client.get(self._key(key))
        except redis.RedisError as e:
            self._stats["errors"] += 1
            raise wrap_external_exception(e, operation="redis_get", key=key)

        if value is None:
            self._stats["misses"] += 1
            logger.debug(f"Redis MISS: {key}")
            return None
        return value

    async def set(self, key: str, value: str) -> None:
        await self.connect()

        try:
            await self._client.set(self._key(key), value)
        except redis.RedisError as e:
            self._stats["errors"] += 1
            raise wrap_external_exception(e, operation="redis_set", key=key)

        self._stats["sets"] += 1
        logger.debug(f"Redis SET: {key}")

    def get_stats(self) -> dict:
        """Return operation statistics"""
        return dict(self._stats)
