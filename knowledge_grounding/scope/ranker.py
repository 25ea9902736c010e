"""Two-tier priority ranking of knowledge rows."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping

from knowledge_grounding.config import DEFAULT_DEPTH_SCORES, DEFAULT_PREFERRED_TYPES
from knowledge_grounding.models import KnowledgeRow

PREFERRED_TYPES: frozenset[str] = frozenset(DEFAULT_PREFERRED_TYPES)
DEPTH_SCORES: Mapping[str, int] = DEFAULT_DEPTH_SCORES
TYPE_WEIGHT = 2


def type_score(content_type: str, preferred_types: Collection[str] = PREFERRED_TYPES) -> int:
    """Return the type-preference score (``TYPE_WEIGHT`` or 0)."""
    return TYPE_WEIGHT if content_type.lower() in preferred_types else 0


def depth_score(depth: str | None, depth_scores: Mapping[str, int] = DEPTH_SCORES) -> int:
    """Return the depth-preference score; unknown or missing depth scores 0."""
    return depth_scores.get((depth or "").lower(), 0)


def composite_score(
    row: KnowledgeRow,
    *,
    preferred_types: Collection[str] = PREFERRED_TYPES,
    depth_scores: Mapping[str, int] = DEPTH_SCORES,
) -> int:
    """Sum of the type-preference and depth-preference scores of *row*.

    Parameters
    ----------
    row : KnowledgeRow
        Row to score.
    preferred_types : Collection[str]
        Lowercase content types that earn the type bonus.
    depth_scores : Mapping[str, int]
        Lowercase depth label to score.

    Returns
    -------
    int
    """
    return type_score(row.content_type, preferred_types) + depth_score(row.depth, depth_scores)


def rank_rows(
    rows: Iterable[KnowledgeRow],
    *,
    preferred_types: Collection[str] = PREFERRED_TYPES,
    depth_scores: Mapping[str, int] = DEPTH_SCORES,
) -> list[KnowledgeRow]:
    """Order rows by descending composite score.

    Rows with equal scores keep their input order: each row is tagged with its
    position and the position is part of the sort key.  The input is left
    untouched.

    Parameters
    ----------
    rows : Iterable[KnowledgeRow]
        Rows in load order.
    preferred_types : Collection[str]
        Lowercase content types that earn the type bonus.
    depth_scores : Mapping[str, int]
        Lowercase depth label to score.

    Returns
    -------
    list[KnowledgeRow]
        A new, ranked list.
    """
    preferred = frozenset(t.lower() for t in preferred_types)
    depths = {k.lower(): v for k, v in depth_scores.items()}
    keyed = [
        (-composite_score(row, preferred_types=preferred, depth_scores=depths), index, row)
        for index, row in enumerate(rows)
    ]
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [row for _, _, row in keyed]
