"""Relevance filtering, priority ranking and context rendering."""

from knowledge_grounding.scope.filter import filter_rows, match_rows, row_matches
from knowledge_grounding.scope.pipeline import scope_knowledge
from knowledge_grounding.scope.ranker import composite_score, rank_rows
from knowledge_grounding.scope.serializer import NO_MATCHES_TEXT, serialize_row, serialize_rows

__all__ = [
    "NO_MATCHES_TEXT",
    "composite_score",
    "filter_rows",
    "match_rows",
    "rank_rows",
    "row_matches",
    "scope_knowledge",
    "serialize_row",
    "serialize_rows",
]
