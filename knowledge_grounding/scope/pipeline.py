"""Filter, rank, truncate and render the corpus for one query."""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence

from knowledge_grounding.models import KnowledgeRow, ScopedContext
from knowledge_grounding.scope.filter import match_rows
from knowledge_grounding.scope.ranker import DEPTH_SCORES, PREFERRED_TYPES, rank_rows
from knowledge_grounding.scope.serializer import serialize_rows

MAX_ROWS = 12


def scope_knowledge(
    query: str,
    rows: Sequence[KnowledgeRow],
    *,
    max_rows: int = MAX_ROWS,
    preferred_types: Collection[str] = PREFERRED_TYPES,
    depth_scores: Mapping[str, int] = DEPTH_SCORES,
) -> ScopedContext:
    """Select and render the knowledge relevant to *query*.

    Parameters
    ----------
    query : str
        Free-text user query.
    rows : Sequence[KnowledgeRow]
        Full corpus in load order.
    max_rows : int
        Maximum number of rows kept after ranking.
    preferred_types : Collection[str]
        Content types that earn the type bonus.
    depth_scores : Mapping[str, int]
        Depth label to score.

    Returns
    -------
    ScopedContext
    """
    matches = match_rows(query, rows)
    relevant = matches if matches else list(rows)
    ranked = rank_rows(relevant, preferred_types=preferred_types, depth_scores=depth_scores)
    selected = tuple(ranked[: max(max_rows, 0)])
    return ScopedContext(
        rows=selected,
        text=serialize_rows(selected),
        matched=bool(matches),
        total=len(rows),
    )
