"""Conversation context manager.

Decides which part of a growing chat history is sent to the chat model:
a sliding window of recent turns, preceded by a cached summary of older
turns once the conversation is long enough.
"""

import logging

from beatrice.config.models import ContextConfig
from beatrice.domain.entities import (
    ContextSource,
    ConversationContext,
    Message,
    OptimizedContext,
    create_summary_message,
)
from beatrice.domain.services.protocols import CacheStore, ConversationSummarizer

logger = logging.getLogger(__name__)


class ContextManager:
    """Builds the message list for each chat turn.

    Stateless between calls; the cache store is the only durable owner
    of per-session state. Never raises from its public operations:
    collaborator failures degrade to the trailing window of the
    caller's messages.
    """

    def __init__(
        self,
        cache_store: CacheStore,
        summarizer: ConversationSummarizer,
        config: ContextConfig | None = None,
    ) -> None:
        """Initialize the context manager.

        Args:
            cache_store: Key-value store for summaries. A store whose
                ``is_available`` is False disables caching.
            summarizer: Summarizes messages older than the window.
            config: Window, threshold and TTL settings.
        """
        self._cache_store = cache_store
        self._summarizer = summarizer
        self._config = config or ContextConfig()

    async def get_optimized_context(
        self,
        session_id: str,
        recent_messages: list[Message],
    ) -> OptimizedContext:
        """Get the optimized conversation context for a session.

        Args:
            session_id: Session identifier (used only as a cache key).
            recent_messages: Conversation so far, oldest first.

        Returns:
            Messages to send, tagged with the path that produced them.
        """
        if not self._cache_store.is_available:
            logger.debug("Cache not configured - using simple context window")
            return OptimizedContext(
                messages=self._window(recent_messages),
                source=ContextSource.UNCACHED,
            )

        try:
            return await self._build_context(session_id, recent_messages)
        except Exception:
            logger.exception(
                "Context optimization error (session=%s, phase=summarize), "
                "using fallback",
                session_id,
            )
            return self._fallback(recent_messages)

    async def get_context_messages(
        self,
        session_id: str,
        recent_messages: list[Message],
    ) -> list[Message]:
        """Same as ``get_optimized_context`` but returns only the messages."""
        result = await self.get_optimized_context(session_id, recent_messages)
        return result.messages

    async def clear_context(self, session_id: str) -> None:
        """Delete the cached context for a session.

        Silent when no cache is configured or the deletion fails.

        Args:
            session_id: Session identifier.
        """
        if not self._cache_store.is_available:
            return

        try:
            await self._cache_store.delete(self._cache_key(session_id))
            logger.debug("Cleared cached context for session %s", session_id)
        except Exception:
            logger.exception(
                "Error clearing context (session=%s, phase=clear)", session_id
            )

    async def _build_context(
        self,
        session_id: str,
        recent_messages: list[Message],
    ) -> OptimizedContext:
        try:
            cached = await self._read_cached_context(session_id)
        except Exception:
            logger.exception(
                "Error reading cached context (session=%s, phase=read), "
                "using fallback",
                session_id,
            )
            return self._fallback(recent_messages)

        if cached is not None and cached.has_summary:
            logger.debug("Using cached summary for session %s", session_id)
            return self._with_summary(
                cached.summary or "", recent_messages, ContextSource.FROM_CACHE
            )

        older = recent_messages[: -self._config.window_size]
        if len(recent_messages) <= self._config.summary_threshold or not older:
            return OptimizedContext(
                messages=list(recent_messages),
                source=ContextSource.PASSTHROUGH,
            )

        logger.info(
            "Summarizing %d older messages for session %s",
            len(older),
            session_id,
        )
        summary = await self._summarizer.summarize(older, session_id=session_id)

        await self._write_cached_context(
            session_id,
            ConversationContext(
                messages=self._window(recent_messages),
                summary=summary,
                message_count=len(recent_messages),
            ),
        )
        return self._with_summary(summary, recent_messages, ContextSource.FRESH)

    async def _read_cached_context(
        self, session_id: str
    ) -> ConversationContext | None:
        """Read and decode the cached context.

        Raises:
            Exception: Cache errors and undecodable payloads.
        """
        raw = await self._cache_store.get(self._cache_key(session_id))
        if raw is None:
            return None
        return ConversationContext.from_json(raw)

    async def _write_cached_context(
        self, session_id: str, context: ConversationContext
    ) -> None:
        """Write the context; failures are logged and swallowed."""
        try:
            await self._cache_store.set(
                self._cache_key(session_id),
                context.to_json(),
                self._config.cache_ttl_seconds,
            )
        except Exception:
            logger.exception(
                "Error caching context (session=%s, phase=write)", session_id
            )

    def _with_summary(
        self,
        summary: str,
        recent_messages: list[Message],
        source: ContextSource,
    ) -> OptimizedContext:
        return OptimizedContext(
            messages=[create_summary_message(summary), *self._window(recent_messages)],
            source=source,
        )

    def _fallback(self, recent_messages: list[Message]) -> OptimizedContext:
        return OptimizedContext(
            messages=self._window(recent_messages),
            source=ContextSource.FALLBACK,
        )

    def _window(self, messages: list[Message]) -> list[Message]:
        return list(messages[-self._config.window_size :])

    def _cache_key(self, session_id: str) -> str:
        return f"{self._config.key_prefix}{session_id}"
