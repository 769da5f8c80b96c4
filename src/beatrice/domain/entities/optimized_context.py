"""Optimized context result entity."""

from dataclasses import dataclass, field
from enum import Enum

from beatrice.domain.entities.message import ASSISTANT_ROLE, Message

SUMMARY_PREFIX = "[Previous conversation summary]: "


class ContextSource(Enum):
    """Which path produced an optimized context."""

    UNCACHED = "uncached"
    FROM_CACHE = "from_cache"
    FRESH = "fresh"
    PASSTHROUGH = "passthrough"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class OptimizedContext:
    """Message list to send to the chat model, tagged with its origin.

    Attributes:
        messages: Ordered oldest to newest. At most one summary
            pseudo-message, always first.
        source: Path that produced the list.
    """

    messages: list[Message] = field(default_factory=list)
    source: ContextSource = ContextSource.PASSTHROUGH

    @property
    def has_summary(self) -> bool:
        """True when the first message is a summary pseudo-message."""
        return bool(self.messages) and is_summary_message(self.messages[0])


def create_summary_message(summary: str) -> Message:
    """Create the synthetic assistant message carrying a summary.

    Args:
        summary: Summary text.

    Returns:
        Assistant message prefixed with the summary marker.
    """
    return Message(role=ASSISTANT_ROLE, content=f"{SUMMARY_PREFIX}{summary}")


def is_summary_message(message: Message) -> bool:
    """Check whether a message is a summary pseudo-message."""
    return message.role == ASSISTANT_ROLE and message.content.startswith(
        SUMMARY_PREFIX
    )
