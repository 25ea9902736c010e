"""Lexical relevance filtering of knowledge rows against a query."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from knowledge_grounding.models import KnowledgeRow

# Facets consulted for matching; ``content`` is never scanned.
MATCH_FACETS: tuple[str, ...] = ("project", "title", "tags", "pillar", "medium", "audience")


def row_matches(row: KnowledgeRow, query: str) -> bool:
    """Return whether *row* is relevant to *query*.

    A row matches when any of its match facets, lowercased, occurs inside the
    lowercased query, or when any whitespace-delimited query token occurs
    inside the row's tags.  Note the direction: a facet value has to appear
    verbatim in the query, not the other way round.

    Parameters
    ----------
    row : KnowledgeRow
        Candidate row.
    query : str
        Free-text user query.

    Returns
    -------
    bool
    """
    q = query.lower()
    return _matches(row, q, q.split())


def match_rows(query: str, rows: Iterable[KnowledgeRow]) -> list[KnowledgeRow]:
    """Return the rows matching *query*, in input order.

    Parameters
    ----------
    query : str
        Free-text user query.
    rows : Iterable[KnowledgeRow]
        Candidate rows.

    Returns
    -------
    list[KnowledgeRow]
    """
    q = query.lower()
    tokens = q.split()
    return [row for row in rows if _matches(row, q, tokens)]


def filter_rows(query: str, rows: Sequence[KnowledgeRow]) -> list[KnowledgeRow]:
    """Narrow *rows* to those relevant to *query*.

    Falls back to every row when nothing matches, so a non-empty corpus
    never yields an empty selection.

    Parameters
    ----------
    query : str
        Free-text user query.
    rows : Sequence[KnowledgeRow]
        Full corpus.

    Returns
    -------
    list[KnowledgeRow]
    """
    matches = match_rows(query, rows)
    return matches if matches else list(rows)


def _matches(row: KnowledgeRow, q: str, tokens: list[str]) -> bool:
    for facet in MATCH_FACETS:
        value = getattr(row, facet)
        if value and value.lower() in q:
            return True
    tags = (row.tags or "").lower()
    return bool(tags) and any(token in tags for token in tokens)
