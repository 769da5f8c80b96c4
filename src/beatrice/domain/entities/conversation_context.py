"""Cached conversation context entity."""

import json
from dataclasses import dataclass, field
from typing import Any

from beatrice.domain.entities.message import Message
from beatrice.domain.exceptions import ContextSchemaError

CONTEXT_SCHEMA_VERSION = 1
# Payloads written before the version field existed
LEGACY_SCHEMA_VERSION = 0


@dataclass(frozen=True)
class ConversationContext:
    """Compressed state of one session at the time it was cached.

    The summary condenses everything older than ``messages``; the two
    together cover the conversation as it was when the entry was written.

    Attributes:
        messages: Trailing window current at cache-write time.
        summary: Condensation of the messages preceding the window.
        message_count: Total turns observed at write time (diagnostic only).
        schema_version: Version of the serialized shape.
    """

    messages: list[Message] = field(default_factory=list)
    summary: str | None = None
    message_count: int = 0
    schema_version: int = CONTEXT_SCHEMA_VERSION

    @property
    def has_summary(self) -> bool:
        """True when a non-empty summary is present."""
        return bool(self.summary)

    def to_json(self) -> str:
        """Serialize to the cache JSON shape.

        Always writes the current schema version.
        """
        payload: dict[str, Any] = {
            "version": CONTEXT_SCHEMA_VERSION,
            "messages": [message.to_dict() for message in self.messages],
            "messageCount": self.message_count,
        }
        if self.summary is not None:
            payload["summary"] = self.summary
        return json.dumps(payload, ensure_ascii=False)

    @classmethod
    def from_json(cls, raw: str | bytes) -> "ConversationContext":
        """Deserialize a cached payload.

        Args:
            raw: JSON text as stored in the cache.

        Returns:
            ConversationContext instance.

        Raises:
            ContextSchemaError: Payload is not decodable or has an
                unsupported version.
        """
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            raise ContextSchemaError(f"Cached context is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ContextSchemaError("Cached context is not a JSON object")

        if "version" in data:
            version = data["version"]
        elif "messages" in data and "messageCount" in data:
            version = LEGACY_SCHEMA_VERSION
        else:
            raise ContextSchemaError("Cached context has no schema version")

        if version not in (LEGACY_SCHEMA_VERSION, CONTEXT_SCHEMA_VERSION):
            raise ContextSchemaError(
                f"Unsupported context schema version: {version!r}", version=version
            )

        try:
            return cls._from_payload(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ContextSchemaError(
                f"Malformed cached context: {e}", version=version
            ) from e

    @classmethod
    def _from_payload(cls, data: dict[str, Any]) -> "ConversationContext":
        """Build from a decoded payload (legacy and v1 share field names)."""
        raw_messages = data.get("messages") or []
        if not isinstance(raw_messages, list):
            raise TypeError("messages must be a list")

        summary = data.get("summary")
        if summary is not None and not isinstance(summary, str):
            raise TypeError("summary must be a string")

        message_count = data.get("messageCount", len(raw_messages))
        if not isinstance(message_count, int) or isinstance(message_count, bool):
            raise TypeError("messageCount must be an integer")

        return cls(
            messages=[Message.from_dict(item) for item in raw_messages],
            summary=summary,
            message_count=message_count,
            schema_version=CONTEXT_SCHEMA_VERSION,
        )
