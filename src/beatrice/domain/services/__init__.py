"""Domain services."""

from beatrice.domain.services.protocols import CacheStore, ConversationSummarizer

__all__ = ["CacheStore", "ConversationSummarizer"]
