"""Common fixtures."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest

from beatrice.domain.entities import Message


def create_messages(count: int, start: int = 0) -> list[Message]:
    """Create alternating user/assistant messages, oldest first."""
    base = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
    return [
        Message(
            role="user" if i % 2 == 0 else "assistant",
            content=f"message {i}",
            created_at=base + timedelta(minutes=i),
        )
        for i in range(start, start + count)
    ]


@pytest.fixture
def make_messages() -> Callable[..., list[Message]]:
    """Factory fixture for message lists."""
    return create_messages
