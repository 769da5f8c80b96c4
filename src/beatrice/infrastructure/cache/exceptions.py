"""Cache-related exceptions."""


class CacheError(Exception):
    """Base exception for cache backend errors."""


class CacheConnectionError(CacheError):
    """Cache backend unreachable (connection refused, timeout, etc.)."""
