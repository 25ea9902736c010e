"""Shared fixtures for knowledge grounding tests."""

import os

# Use litellm's bundled model cost map instead of fetching it over the network at import.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

import pytest

from knowledge_grounding.chat.backends.base import Backend
from knowledge_grounding.models import KnowledgeRow

_ENV_VARS = (
    "KNOWLEDGE_SOURCE_URL",
    "KNOWLEDGE_SOURCE_API_KEY",
    "KNOWLEDGE_SOURCE_PATH",
    "NEXT_PUBLIC_SUPABASE_URL",
    "NEXT_PUBLIC_SUPABASE_ANON_KEY",
    "CHAT_BACKEND_MODEL",
    "CHAT_BACKEND_TEMPERATURE",
    "CHAT_BACKEND_MAX_TOKENS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep configuration tests independent of the caller's environment."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class MockBackend(Backend):
    """In-memory backend that records the messages it receives."""

    name = "mock"

    def __init__(self, response="mock response", **kwargs):
        self._response = response
        self.kwargs = kwargs
        self.calls = []

    def complete(self, messages, *, model=None, temperature=0.3, max_tokens=350):
        self.calls.append({"messages": messages, "model": model, "temperature": temperature, "max_tokens": max_tokens})
        return self._response


@pytest.fixture()
def sample_records():
    """Raw records shaped like the knowledge table, in id order."""
    return [
        {
            "id": 1,
            "project": "jascore_1_0",
            "type": "summary",
            "title": "JasCore",
            "content": "JasCore is a design system for conversational products.",
            "tags": "design systems, ai",
            "pillar": "AI x UX",
            "medium": "case study",
            "audience": "designers",
            "role": "Lead designer",
            "tools_methods": "Figma, prompt prototyping",
            "one_liner": "A design system for AI chat.",
            "is_highlight": True,
            "depth": "overview",
        },
        {
            "id": 2,
            "project": "jascore_1_0",
            "type": "research_insight",
            "title": "JasCore interviews",
            "content": "Twelve interviews shaped the component set.",
            "tags": "research",
            "pillar": None,
            "medium": None,
            "audience": None,
            "role": None,
            "tools_methods": None,
            "one_liner": None,
            "is_highlight": False,
            "depth": "deep_dive",
        },
        {
            "id": 3,
            "project": "agents_course",
            "type": "method",
            "title": "Designing Agents",
            "content": "A course on designing with AI agents.",
            "tags": "education, agents",
            "pillar": "teaching",
            "medium": "workshop",
            "audience": "students",
            "depth": "supporting_detail",
        },
    ]


@pytest.fixture()
def sample_rows(sample_records):
    """Coerced rows for the sample records."""
    return [KnowledgeRow.from_record(r) for r in sample_records]


def make_row(project="zz_project", content_type="note", content="body", **facets):
    """Build a row with only the facets a test cares about."""
    return KnowledgeRow(project=project, content_type=content_type, content=content, **facets)
