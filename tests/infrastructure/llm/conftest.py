"""Common fixtures for LLM infrastructure tests."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from beatrice.config import LLMConfig
from beatrice.infrastructure.llm import LLMClient


@pytest.fixture
def summary_llm_config() -> LLMConfig:
    """Create test summary LLM config."""
    return LLMConfig(
        model="claude-3-haiku-20240307",
        temperature=0.3,
        max_tokens=200,
        timeout=10.0,
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """Create mock LLMClient."""
    client = MagicMock(spec=LLMClient)
    client.complete = AsyncMock(return_value="The user asked about moon rituals.")
    return client
