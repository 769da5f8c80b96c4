"""LLM-based conversation summarizer implementation."""

import logging

from beatrice.domain.entities import USER_ROLE, Message
from beatrice.infrastructure.llm.client import LLMClient
from beatrice.infrastructure.llm.templates import create_jinja_env

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "Previous conversation about spiritual matters."


class LLMConversationSummarizer:
    """LLM-based conversation summarization service.

    Condenses older chat turns into a short summary using a small, fast
    model. Never raises: any failure yields ``FALLBACK_SUMMARY``.
    """

    def __init__(
        self,
        client: LLMClient,
        *,
        persona_name: str = "Beatrice",
        fallback_summary: str = FALLBACK_SUMMARY,
    ) -> None:
        """Initialize the summarizer.

        Args:
            client: LLM client configured with the summary model.
            persona_name: Display name for assistant turns.
            fallback_summary: Text returned when summarization fails.
        """
        self._client = client
        self._persona_name = persona_name
        self._fallback_summary = fallback_summary
        self._jinja_env = create_jinja_env()
        self._system_template = self._jinja_env.get_template("summary_system.j2")
        self._request_template = self._jinja_env.get_template("summary_request.j2")

    async def summarize(
        self, messages: list[Message], *, session_id: str | None = None
    ) -> str:
        """Summarize messages.

        Args:
            messages: Messages to condense, oldest first.
            session_id: Session the messages belong to (for logging).

        Returns:
            Generated summary, or the fallback text on any failure.
        """
        llm_messages = [
            {"role": "system", "content": self._system_template.render().strip()},
            {"role": "user", "content": self._build_prompt(messages)},
        ]

        try:
            response = await self._client.complete(llm_messages)
        except Exception:
            logger.exception(
                "Error summarizing conversation "
                "(session=%s, phase=summarize, messages=%d), using fallback",
                session_id,
                len(messages),
            )
            return self._fallback_summary

        summary = response.strip()
        if not summary:
            logger.warning(
                "Summarizer returned blank text "
                "(session=%s, phase=summarize), using fallback",
                session_id,
            )
            return self._fallback_summary
        return summary

    def _build_prompt(self, messages: list[Message]) -> str:
        """Build the user prompt."""
        return self._request_template.render(
            persona_name=self._persona_name,
            lines=self._format_messages(messages),
        ).strip()

    def _format_messages(self, messages: list[Message]) -> list[str]:
        """Format messages as ``<Role>: <content>`` lines."""
        return [
            f"{self._role_label(message.role)}: {message.content}"
            for message in messages
        ]

    def _role_label(self, role: str) -> str:
        return "User" if role == USER_ROLE else self._persona_name
