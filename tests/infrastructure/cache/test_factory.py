"""Tests for create_cache_store."""

from beatrice.config import CacheConfig
from beatrice.infrastructure.cache import (
    InMemoryCacheStore,
    NullCacheStore,
    RedisCacheStore,
    create_cache_store,
)


def test_default_is_null_store() -> None:
    """Test that no backend means caching is disabled."""
    assert isinstance(create_cache_store(CacheConfig()), NullCacheStore)


def test_memory_backend() -> None:
    """Test the in-memory backend."""
    store = create_cache_store(CacheConfig(backend="memory"))

    assert isinstance(store, InMemoryCacheStore)


def test_redis_backend() -> None:
    """Test the Redis backend (no connection is made on creation)."""
    store = create_cache_store(
        CacheConfig(backend="redis", url="redis://localhost:6379/0")
    )

    assert isinstance(store, RedisCacheStore)


def test_redis_without_url_is_unconfigured() -> None:
    """Test that a Redis backend without URL degrades to no cache."""
    store = create_cache_store(CacheConfig(backend="redis", url=None))

    assert isinstance(store, NullCacheStore)
    assert store.is_available is False
