"""Tests for GroundingPipeline and ChatService, end to end."""

import json

import pytest
from conftest import MockBackend

from knowledge_grounding.api import ChatService, GroundingPipeline
from knowledge_grounding.chat.backends.base import BackendRegistry
from knowledge_grounding.chat.engine import ChatEngine
from knowledge_grounding.chat.prompts.registry import PromptRegistry
from knowledge_grounding.knowledge.static import StaticKnowledgeSource
from knowledge_grounding.knowledge.store import KnowledgeStore
from knowledge_grounding.models import ChatRequest
from knowledge_grounding.scope.serializer import NO_MATCHES_TEXT


def _pipeline(records, **kwargs):
    return GroundingPipeline(KnowledgeStore(StaticKnowledgeSource(records=records)), **kwargs)


def test_ground_scopes_and_bounds_history(sample_records):
    history = [{"role": "assistant" if i % 2 else "user", "content": f"turn {i}"} for i in range(9)]
    grounded = _pipeline(sample_records).ground(ChatRequest(message="JasCore overview", history=history))

    assert grounded.message == "JasCore overview"
    assert [r.title for r in grounded.context.rows] == ["JasCore"]
    assert grounded.context.matched
    assert [m.content for m in grounded.history] == [f"turn {i}" for i in range(3, 9)]


def test_ground_respects_limits(sample_records):
    grounded = _pipeline(sample_records, max_rows=1, max_history=0).ground(
        ChatRequest(message="hello", history=[{"role": "user", "content": "earlier"}])
    )
    assert [r.title for r in grounded.context.rows] == ["JasCore"]
    assert grounded.history == []


def test_ground_with_unavailable_source():
    grounded = GroundingPipeline(KnowledgeStore(None)).ground(ChatRequest(message="hello"))
    assert grounded.context.text == NO_MATCHES_TEXT
    assert grounded.context.total == 0


def test_ground_loads_corpus_once(sample_records):
    pipeline = _pipeline(sample_records)
    pipeline.ground(ChatRequest(message="hello"))
    assert pipeline.store.loaded
    first = pipeline.store.load()
    pipeline.ground(ChatRequest(message="agents"))
    assert pipeline.store.load() is first


def test_chat_end_to_end(sample_records):
    backend = MockBackend(response="JasCore is a design system for conversational products.")
    spec = PromptRegistry().get("grounded_chat")
    service = ChatService(_pipeline(sample_records), ChatEngine(backend, spec, default_model="mock-model"))

    result = service.chat(
        {
            "message": "What is JasCore?",
            "conversationHistory": [{"role": "system", "content": "be nice"}, {"role": "assistant", "content": " "}],
        }
    )

    assert result.response.startswith("JasCore is a design system")
    assert result.model == "mock-model"
    assert [r.title for r in result.context.rows] == ["JasCore"]
    assert [m.role for m in result.history] == ["user"]

    messages = backend.calls[0]["messages"]
    assert messages[0]["role"] == "system"
    assert "PROJECT: jascore_1_0" in messages[0]["content"]
    assert "JasCore interviews" not in messages[0]["content"]
    assert messages[1] == {"role": "user", "content": "be nice"}
    assert messages[-1] == {"role": "user", "content": "What is JasCore?"}


def test_chat_rejects_missing_message(sample_records):
    service = ChatService(_pipeline(sample_records), ChatEngine(MockBackend(), PromptRegistry().get("grounded_chat")))
    with pytest.raises(ValueError, match="No message provided"):
        service.chat({"history": []})


def test_service_from_config(tmp_path, sample_records):
    kb = tmp_path / "kb.json"
    kb.write_text(json.dumps(sample_records), encoding="utf-8")
    BackendRegistry.register("_test_api_mock")(MockBackend)
    try:
        service = ChatService.from_config(
            {
                "source": {"type": "static", "path": str(kb)},
                "scope": {"max_rows": 2},
                "backend": {"type": "_test_api_mock", "model": "mock-model", "response": "Hi there"},
            }
        )
        result = service.chat({"message": "hello"})
    finally:
        del BackendRegistry._backends["_test_api_mock"]

    assert result.response == "Hi there"
    assert not result.context.matched
    assert [r.title for r in result.context.rows] == ["JasCore", "Designing Agents"]
