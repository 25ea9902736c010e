"""Tests for data models."""

import pytest

from knowledge_grounding.models import ChatRequest, ConversationMessage, KnowledgeRow


def test_from_record_maps_table_columns(sample_records):
    row = KnowledgeRow.from_record(sample_records[0])
    assert row.project == "jascore_1_0"
    assert row.content_type == "summary"
    assert row.tools_or_methods == "Figma, prompt prototyping"
    assert row.one_liner == "A design system for AI chat."
    assert row.is_highlight is True
    assert row.depth == "overview"


def test_from_record_accepts_camel_case():
    row = KnowledgeRow.from_record(
        {"project": "p", "contentType": "method", "content": "c", "toolsOrMethods": "pen", "isHighlight": "yes"}
    )
    assert row.content_type == "method"
    assert row.tools_or_methods == "pen"
    assert row.is_highlight is True


def test_from_record_blank_facets_become_none():
    row = KnowledgeRow.from_record({"project": "p", "type": "t", "content": "c", "title": "   ", "tags": ""})
    assert row.title is None
    assert row.tags is None


def test_from_record_joins_list_facets():
    row = KnowledgeRow.from_record({"project": "p", "type": "t", "content": "c", "tags": ["ai", " ux ", None]})
    assert row.tags == "ai, ux"


@pytest.mark.parametrize("missing", ["project", "type", "content"])
def test_from_record_requires_core_fields(missing):
    record = {"project": "p", "type": "t", "content": "c"}
    record[missing] = None
    with pytest.raises(ValueError, match="missing required field"):
        KnowledgeRow.from_record(record)


def test_from_record_skips_blank_alias():
    row = KnowledgeRow.from_record(
        {
            "project": "p",
            "content_type": "",
            "type": "summary",
            "content": "c",
            "tools_or_methods": "  ",
            "tools_methods": "Figma",
        }
    )
    assert row.content_type == "summary"
    assert row.tools_or_methods == "Figma"


def test_from_record_rejects_non_mapping():
    with pytest.raises(ValueError, match="must be a mapping"):
        KnowledgeRow.from_record(["p", "t", "c"])


def test_rows_are_immutable(sample_rows):
    with pytest.raises(AttributeError):
        sample_rows[0].project = "other"


def test_conversation_message_to_dict():
    assert ConversationMessage("assistant", "hi").to_dict() == {"role": "assistant", "content": "hi"}


def test_chat_request_from_payload_history():
    request = ChatRequest.from_payload({"message": "hi", "history": [{"role": "user", "content": "x"}]})
    assert request.message == "hi"
    assert request.history == [{"role": "user", "content": "x"}]


def test_chat_request_falls_back_to_conversation_history():
    request = ChatRequest.from_payload(
        {"message": "hi", "history": "not a list", "conversationHistory": [{"content": "y"}]}
    )
    assert request.history == [{"content": "y"}]


def test_chat_request_defaults_to_empty_history():
    assert ChatRequest.from_payload({"message": "hi"}).history == []


@pytest.mark.parametrize("payload", [None, "hi", {}, {"message": 42}])
def test_chat_request_requires_string_message(payload):
    with pytest.raises(ValueError, match="No message provided"):
        ChatRequest.from_payload(payload)
