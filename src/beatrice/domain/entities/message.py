"""Message entity."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

USER_ROLE = "user"
ASSISTANT_ROLE = "assistant"
VALID_ROLES = frozenset({USER_ROLE, ASSISTANT_ROLE})


@dataclass(frozen=True)
class Message:
    """A single chat turn.

    Attributes:
        role: "user" or "assistant".
        content: Message text.
        created_at: When the message was stored (if known).
    """

    role: str
    content: str
    created_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate the role."""
        if self.role not in VALID_ROLES:
            raise ValueError(f"Invalid message role: {self.role!r}")

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible mapping.

        Returns:
            Mapping with role, content and (if set) ISO-8601 created_at.
        """
        data: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.created_at is not None:
            data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        """Build a message from a mapping produced by ``to_dict``.

        Args:
            data: Mapping with role, content and optional created_at.

        Returns:
            Message instance.

        Raises:
            TypeError: data is not a mapping or content is not a string.
            KeyError: role or content is missing.
            ValueError: role or created_at is invalid.
        """
        if not isinstance(data, dict):
            raise TypeError(f"Message must be an object, got {type(data).__name__}")
        content = data["content"]
        if not isinstance(content, str):
            raise TypeError(
                f"Message content must be a string, got {type(content).__name__}"
            )
        created_at = data.get("created_at")
        return cls(
            role=data["role"],
            content=content,
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
