"""Cache store infrastructure."""

from beatrice.infrastructure.cache.exceptions import CacheConnectionError, CacheError
from beatrice.infrastructure.cache.factory import create_cache_store
from beatrice.infrastructure.cache.memory_store import InMemoryCacheStore
from beatrice.infrastructure.cache.null_store import NullCacheStore
from beatrice.infrastructure.cache.redis_store import RedisCacheStore

__all__ = [
    "CacheConnectionError",
    "CacheError",
    "InMemoryCacheStore",
    "NullCacheStore",
    "RedisCacheStore",
    "create_cache_store",
]
