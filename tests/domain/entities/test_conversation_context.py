"""Tests for ConversationContext entity."""

import json

import pytest

from beatrice.domain.entities import ConversationContext, Message
from beatrice.domain.exceptions import ContextSchemaError


@pytest.fixture
def sample_context() -> ConversationContext:
    """Create a sample cached context."""
    return ConversationContext(
        messages=[
            Message(role="user", content="What does the new moon mean?"),
            Message(role="assistant", content="It is a time for intentions."),
        ],
        summary="The user is learning about lunar cycles.",
        message_count=22,
    )


class TestConversationContextToJson:
    """Tests for serialization."""

    def test_payload_shape(self, sample_context: ConversationContext) -> None:
        """Test the cached JSON field names."""
        payload = json.loads(sample_context.to_json())

        assert payload == {
            "version": 1,
            "messages": [
                {"role": "user", "content": "What does the new moon mean?"},
                {"role": "assistant", "content": "It is a time for intentions."},
            ],
            "summary": "The user is learning about lunar cycles.",
            "messageCount": 22,
        }

    def test_summary_omitted_when_none(self) -> None:
        """Test that a missing summary is not written."""
        payload = json.loads(ConversationContext(message_count=3).to_json())

        assert "summary" not in payload

    def test_read_back(self, sample_context: ConversationContext) -> None:
        """Test that a written payload is read back equal."""
        assert ConversationContext.from_json(sample_context.to_json()) == (
            sample_context
        )


class TestConversationContextFromJson:
    """Tests for deserialization."""

    def test_legacy_payload_upgraded(self) -> None:
        """Test that payloads without a version are read as legacy."""
        raw = json.dumps(
            {
                "messages": [{"role": "user", "content": "hi"}],
                "summary": "Earlier talk",
                "messageCount": 21,
            }
        )

        context = ConversationContext.from_json(raw)

        assert context.summary == "Earlier talk"
        assert context.message_count == 21
        assert context.schema_version == 1

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            "[]",
            '"a string"',
            '{"summary": "no version or messages"}',
        ],
    )
    def test_undecodable_payload(self, raw: str) -> None:
        """Test that non-object or unversioned payloads are rejected."""
        with pytest.raises(ContextSchemaError):
            ConversationContext.from_json(raw)

    def test_unknown_version(self) -> None:
        """Test that an unknown version is rejected with the version attached."""
        raw = json.dumps({"version": 2, "messages": [], "messageCount": 0})

        with pytest.raises(ContextSchemaError) as exc_info:
            ConversationContext.from_json(raw)

        assert exc_info.value.version == 2

    @pytest.mark.parametrize(
        "payload",
        [
            {"version": 1, "messages": "oops", "messageCount": 1},
            {"version": 1, "messages": [{"role": "bot", "content": "x"}]},
            {"version": 1, "messages": [{"role": "user", "content": None}]},
            {"version": 1, "messages": [], "summary": 5},
            {"version": 1, "messages": [], "messageCount": "many"},
        ],
    )
    def test_malformed_fields(self, payload: dict) -> None:
        """Test that malformed fields are reported as schema errors."""
        with pytest.raises(ContextSchemaError):
            ConversationContext.from_json(json.dumps(payload))


class TestHasSummary:
    """Tests for has_summary."""

    @pytest.mark.parametrize(
        ("summary", "expected"),
        [("Earlier talk", True), ("", False), (None, False)],
    )
    def test_has_summary(self, summary: str | None, expected: bool) -> None:
        """Test that only non-empty summaries count."""
        assert ConversationContext(summary=summary).has_summary is expected
