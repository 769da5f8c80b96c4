"""LLM integration."""

from beatrice.infrastructure.llm.client import LLMClient
from beatrice.infrastructure.llm.conversation_summarizer import (
    FALLBACK_SUMMARY,
    LLMConversationSummarizer,
)
from beatrice.infrastructure.llm.exceptions import (
    LLMAuthenticationError,
    LLMEmptyResponseError,
    LLMError,
    LLMRateLimitError,
)

__all__ = [
    "FALLBACK_SUMMARY",
    "LLMAuthenticationError",
    "LLMClient",
    "LLMConversationSummarizer",
    "LLMEmptyResponseError",
    "LLMError",
    "LLMRateLimitError",
]
