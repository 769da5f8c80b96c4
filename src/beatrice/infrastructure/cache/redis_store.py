"""Redis cache store."""

import logging

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from beatrice.infrastructure.cache.exceptions import CacheConnectionError, CacheError

logger = logging.getLogger(__name__)


class RedisCacheStore:
    """CacheStore backed by Redis.

    Values are stored as strings with ``SET key value EX ttl``.
    Redis errors are re-raised as CacheError.
    """

    def __init__(self, redis: Redis) -> None:
        """Initialize the store.

        Args:
            redis: Async Redis client created with ``decode_responses=True``.
        """
        self._redis = redis

    @classmethod
    def from_url(cls, url: str, *, socket_timeout: float = 2.0) -> "RedisCacheStore":
        """Create a store from a Redis URL.

        Args:
            url: Redis connection URL (redis:// or rediss://).
            socket_timeout: Timeout for connect and each command, in seconds.

        Returns:
            RedisCacheStore instance.
        """
        redis = Redis.from_url(
            url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )
        return cls(redis)

    @property
    def is_available(self) -> bool:
        return True

    async def get(self, key: str) -> str | None:
        try:
            return await self._redis.get(key)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise CacheConnectionError(f"Redis GET {key} failed: {e}") from e
        except RedisError as e:
            raise CacheError(f"Redis GET {key} failed: {e}") from e

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self._redis.set(key, value, ex=ttl_seconds)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise CacheConnectionError(f"Redis SET {key} failed: {e}") from e
        except RedisError as e:
            raise CacheError(f"Redis SET {key} failed: {e}") from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except (RedisConnectionError, RedisTimeoutError) as e:
            raise CacheConnectionError(f"Redis DEL {key} failed: {e}") from e
        except RedisError as e:
            raise CacheError(f"Redis DEL {key} failed: {e}") from e

    async def close(self) -> None:
        """Close the connection pool."""
        await self._redis.aclose()
        logger.debug("Redis connection closed")
