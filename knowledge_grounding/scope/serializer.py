"""Deterministic rendering of knowledge rows into a prompt context block."""

from __future__ import annotations

from collections.abc import Sequence

from knowledge_grounding.models import KnowledgeRow

NO_MATCHES_TEXT = "No matching entries found in the knowledge base."
ROW_SEPARATOR = "\n\n---\n\n"

# (label, attribute, placeholder); a ``None`` placeholder marks a required field.
ROW_LAYOUT: tuple[tuple[str, str, str | None], ...] = (
    ("PROJECT", "project", None),
    ("TYPE", "content_type", None),
    ("TITLE", "title", "(no title)"),
    ("PILLAR", "pillar", "(none)"),
    ("MEDIUM", "medium", "(none)"),
    ("AUDIENCE", "audience", "(none)"),
    ("TAGS", "tags", "(none)"),
    ("ROLE", "role", "(unspecified)"),
    ("ONE_LINER", "one_liner", "(none)"),
    ("TOOLS_METHODS", "tools_or_methods", "(none)"),
    ("DEPTH", "depth", "(none)"),
    ("CONTENT", "content", None),
)


def serialize_row(row: KnowledgeRow) -> str:
    """Render one row as labelled lines, substituting placeholders for missing facets."""
    lines = []
    for label, attr, placeholder in ROW_LAYOUT:
        value = getattr(row, attr)
        if value is None:
            value = placeholder or ""
        lines.append(f"{label}: {value}")
    return "\n".join(lines)


def serialize_rows(rows: Sequence[KnowledgeRow]) -> str:
    """Render ordered rows into a single text block.

    Parameters
    ----------
    rows : Sequence[KnowledgeRow]
        Rows in the order they should appear.

    Returns
    -------
    str
        ``NO_MATCHES_TEXT`` for empty input, otherwise the rendered rows
        joined by ``ROW_SEPARATOR``.
    """
    if not rows:
        return NO_MATCHES_TEXT
    return ROW_SEPARATOR.join(serialize_row(row) for row in rows)
