"""Application services."""

from beatrice.application.services.context_manager import ContextManager
from beatrice.application.services.response_cache import (
    QueryCategory,
    ResponseCache,
    categorize,
)

__all__ = ["ContextManager", "QueryCategory", "ResponseCache", "categorize"]
