"""
Redis backend for the typed cache.
"""

from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..errors import BackendError
from ..logging import get_logger
from .base import CacheBackend, CacheEntryOptions


class RedisBackend(CacheBackend):
    """Redis-backed string store."""

    def __init__(self,
                 redis_url: str = "redis://localhost:6379/0",
                 client: Optional[redis.Redis] = None,
                 socket_timeout: float = 5.0,
                 socket_connect_timeout: float = 5.0,
                 health_check_interval: int = 30):
        self.redis_url = redis_url
        self.socket_timeout = socket_timeout
        self.socket_connect_timeout = socket_connect_timeout
        self.health_check_interval = health_check_interval
        self.logger = get_logger("typed_cache.redis")
        self._redis: Optional[redis.Redis] = client

    def _get_redis(self) -> redis.Redis:
        """Get Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_connect_timeout=self.socket_connect_timeout,
                socket_timeout=self.socket_timeout,
                retry_on_timeout=True,
                health_check_interval=self.health_check_interval
            )
        return self._redis

    async def start(self):
        """Connect and verify the server answers."""
        try:
            await self._get_redis().ping()
            self.logger.info("Redis backend started", redis_url=self.redis_url)
        except RedisError as e:
            self.logger.error("Failed to start Redis backend", error=str(e))
            raise BackendError(f"Redis unavailable: {e}", {"redis_url": self.redis_url}) from e

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            self.logger.info("Redis backend stopped")

    async def get_string(self, key: str) -> Optional[str]:
        try:
            value = await self._get_redis().get(key)
        except RedisError as e:
            raise BackendError(f"Redis GET failed: {e}", {"cache_key": key}) from e

        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set_string(self, key: str, value: str, options: CacheEntryOptions) -> None:
        ttl_ms = int(options.absolute_expiration_relative_to_now.total_seconds() * 1000)
        if ttl_ms <= 0:
            raise BackendError("Expiration must be positive", {"cache_key": key, "ttl_ms": ttl_ms})

        try:
            await self._get_redis().set(key, value, px=ttl_ms)
        except RedisError as e:
            raise BackendError(f"Redis SET failed: {e}", {"cache_key": key}) from e

    async def remove(self, key: str) -> None:
        try:
            await self._get_redis().delete(key)
        except RedisError as e:
            raise BackendError(f"Redis DEL failed: {e}", {"cache_key": key}) from e
