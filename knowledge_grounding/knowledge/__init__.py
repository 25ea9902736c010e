"""Knowledge sources and the in-memory corpus store."""

from knowledge_grounding.knowledge.base import KnowledgeSource, KnowledgeSourceError, SourceRegistry
from knowledge_grounding.knowledge.postgrest import PostgrestKnowledgeSource
from knowledge_grounding.knowledge.static import StaticKnowledgeSource
from knowledge_grounding.knowledge.store import KnowledgeStore

__all__ = [
    "KnowledgeSource",
    "KnowledgeSourceError",
    "KnowledgeStore",
    "PostgrestKnowledgeSource",
    "SourceRegistry",
    "StaticKnowledgeSource",
]
