"""Domain entities."""

from beatrice.domain.entities.conversation_context import (
    CONTEXT_SCHEMA_VERSION,
    ConversationContext,
)
from beatrice.domain.entities.message import (
    ASSISTANT_ROLE,
    USER_ROLE,
    Message,
)
from beatrice.domain.entities.optimized_context import (
    SUMMARY_PREFIX,
    ContextSource,
    OptimizedContext,
    create_summary_message,
    is_summary_message,
)

__all__ = [
    "ASSISTANT_ROLE",
    "CONTEXT_SCHEMA_VERSION",
    "ContextSource",
    "ConversationContext",
    "Message",
    "OptimizedContext",
    "SUMMARY_PREFIX",
    "USER_ROLE",
    "create_summary_message",
    "is_summary_message",
]
