"""Domain service protocols."""

from typing import Protocol

from beatrice.domain.entities import Message


class CacheStore(Protocol):
    """Key-value cache abstraction (backend-independent).

    Values are JSON strings. A store whose ``is_available`` is False
    represents an unconfigured backend; callers skip caching entirely.
    """

    @property
    def is_available(self) -> bool:
        """Whether a real backend is configured."""
        ...

    async def get(self, key: str) -> str | None:
        """Get a value.

        Args:
            key: Cache key.

        Returns:
            Stored value, or None if absent or expired.
        """
        ...

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a value with an expiry.

        Args:
            key: Cache key.
            value: Value to store.
            ttl_seconds: Seconds until the entry expires.
        """
        ...

    async def delete(self, key: str) -> None:
        """Delete a value. Absent keys are ignored.

        Args:
            key: Cache key.
        """
        ...


class ConversationSummarizer(Protocol):
    """Conversation summarization abstraction."""

    async def summarize(
        self, messages: list[Message], *, session_id: str | None = None
    ) -> str:
        """Summarize an ordered message sequence.

        Implementations must not raise; on failure they return a fixed
        fallback text.

        Args:
            messages: Messages to condense, oldest first.
            session_id: Session the messages belong to (for logging).

        Returns:
            Summary text.
        """
        ...
