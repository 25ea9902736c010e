"""Knowledge scoping, ranking and rendering for grounded chat."""

from knowledge_grounding.api import ChatService, GroundingPipeline
from knowledge_grounding.config import GroundingConfig, load_config
from knowledge_grounding.history import normalize_history, truncate_history
from knowledge_grounding.knowledge import KnowledgeSource, KnowledgeSourceError, KnowledgeStore
from knowledge_grounding.models import (
    ChatRequest,
    ChatResult,
    ConversationMessage,
    GroundedRequest,
    KnowledgeRow,
    ScopedContext,
)
from knowledge_grounding.scope import filter_rows, rank_rows, scope_knowledge, serialize_rows

__all__ = [
    "ChatRequest",
    "ChatResult",
    "ChatService",
    "ConversationMessage",
    "GroundedRequest",
    "GroundingConfig",
    "GroundingPipeline",
    "KnowledgeRow",
    "KnowledgeSource",
    "KnowledgeSourceError",
    "KnowledgeStore",
    "ScopedContext",
    "filter_rows",
    "load_config",
    "normalize_history",
    "rank_rows",
    "scope_knowledge",
    "serialize_rows",
    "truncate_history",
]
