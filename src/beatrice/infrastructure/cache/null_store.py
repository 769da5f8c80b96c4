"""Cache store used when no backend is configured."""


class NullCacheStore:
    """CacheStore that stores nothing.

    ``is_available`` is False so callers bypass caching altogether.
    """

    @property
    def is_available(self) -> bool:
        return False

    async def get(self, key: str) -> str | None:
        return None

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        return None

    async def delete(self, key: str) -> None:
        return None

    async def close(self) -> None:
        return None
