"""Cache store factory."""

import logging

from beatrice.config import CacheConfig
from beatrice.infrastructure.cache.memory_store import InMemoryCacheStore
from beatrice.infrastructure.cache.null_store import NullCacheStore
from beatrice.infrastructure.cache.redis_store import RedisCacheStore

logger = logging.getLogger(__name__)

CacheStoreImpl = NullCacheStore | InMemoryCacheStore | RedisCacheStore


def create_cache_store(config: CacheConfig) -> CacheStoreImpl:
    """Create the cache store selected by configuration.

    A redis backend without a URL is treated as unconfigured.

    Args:
        config: Cache configuration.

    Returns:
        Cache store instance.
    """
    if config.backend == "redis":
        if not config.url:
            logger.warning("Redis not configured - using simple context window")
            return NullCacheStore()
        logger.info("Using Redis cache store")
        return RedisCacheStore.from_url(config.url, socket_timeout=config.socket_timeout)

    if config.backend == "memory":
        logger.info("Using in-memory cache store")
        return InMemoryCacheStore()

    return NullCacheStore()
