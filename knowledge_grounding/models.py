"""Data models for knowledge grounding."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

# Field name -> accepted source keys, checked in order.
_RECORD_KEYS: dict[str, tuple[str, ...]] = {
    "project": ("project",),
    "content_type": ("content_type", "type", "contentType"),
    "content": ("content",),
    "title": ("title",),
    "tags": ("tags",),
    "pillar": ("pillar",),
    "medium": ("medium",),
    "audience": ("audience",),
    "role": ("role",),
    "tools_or_methods": ("tools_or_methods", "tools_methods", "toolsOrMethods"),
    "one_liner": ("one_liner", "oneLiner"),
    "depth": ("depth",),
    "aspect": ("aspect",),
    "is_highlight": ("is_highlight", "isHighlight"),
}

_REQUIRED = ("project", "content_type", "content")


@dataclass(frozen=True)
class KnowledgeRow:
    """One fact or document unit of the knowledge corpus.

    Parameters
    ----------
    project : str
        Identifier grouping rows into a project.
    content_type : str
        Free-form category label (e.g. ``"summary"``, ``"method"``).
    content : str
        Body text injected into the rendered context.
    title, tags, pillar, medium, audience, role, tools_or_methods, one_liner, depth, aspect : str | None
        Optional descriptive facets.
    is_highlight : bool | None
        Editorial highlight flag.
    """

    project: str
    content_type: str
    content: str
    title: str | None = None
    tags: str | None = None
    pillar: str | None = None
    medium: str | None = None
    audience: str | None = None
    role: str | None = None
    tools_or_methods: str | None = None
    one_liner: str | None = None
    depth: str | None = None
    aspect: str | None = None
    is_highlight: bool | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> KnowledgeRow:
        """Coerce a raw collaborator record into a row.

        Accepts the snake_case column names of the knowledge table,
        camelCase aliases, and the dataclass field names.  Blank facets
        become ``None``; list-valued facets are joined with ``", "``.

        Parameters
        ----------
        record : Mapping[str, Any]
            Raw record from a knowledge source.

        Returns
        -------
        KnowledgeRow

        Raises
        ------
        ValueError
            If the record is not a mapping or ``project``, ``type`` or
            ``content`` is missing or blank.
        """
        if not isinstance(record, Mapping):
            msg = f"Knowledge record must be a mapping, got {type(record).__name__}"
            raise ValueError(msg)

        values: dict[str, Any] = {}
        for name, keys in _RECORD_KEYS.items():
            if name == "is_highlight":
                raw = next((record[k] for k in keys if record.get(k) is not None), None)
                values[name] = None if raw is None else _coerce_flag(raw)
            else:
                # First alias holding non-blank text wins.
                values[name] = next(
                    (text for k in keys if (text := _coerce_text(record.get(k))) is not None),
                    None,
                )

        missing = [name for name in _REQUIRED if values[name] is None]
        if missing:
            msg = f"Knowledge record missing required field(s): {', '.join(missing)}"
            raise ValueError(msg)
        return cls(**values)


def _coerce_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(v).strip() for v in value if v is not None and str(v).strip())
    text = str(value).strip()
    return text or None


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes", "y", "t"}
    return bool(value)


@dataclass(frozen=True)
class ConversationMessage:
    """A single prior turn of the conversation.

    Parameters
    ----------
    role : str
        ``"user"`` or ``"assistant"``.
    content : str
        Trimmed, non-empty message text.
    """

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        """Return the chat-message mapping passed to backends."""
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ScopedContext:
    """Knowledge selected and rendered for a single request.

    Parameters
    ----------
    rows : tuple[KnowledgeRow, ...]
        Selected rows in ranked order.
    text : str
        Serialized context block.
    matched : bool
        ``True`` if the relevance filter narrowed the corpus, ``False`` if it
        fell back to the full corpus.
    total : int
        Size of the corpus the selection was drawn from.
    """

    rows: tuple[KnowledgeRow, ...]
    text: str
    matched: bool = False
    total: int = 0


@dataclass
class ChatRequest:
    """Inbound chat payload.

    Parameters
    ----------
    message : str
        The current user query.
    history : Any
        Raw, unvalidated conversation history.
    """

    message: str
    history: Any = field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> ChatRequest:
        """Construct a request from a decoded JSON body.

        ``history`` is read from ``history`` or, failing that, from
        ``conversationHistory``; whichever is a list first wins.

        Parameters
        ----------
        payload : Any
            Decoded request body.

        Returns
        -------
        ChatRequest

        Raises
        ------
        ValueError
            If *payload* is not a mapping or has no string ``message``.
        """
        if not isinstance(payload, Mapping) or not isinstance(payload.get("message"), str):
            msg = "No message provided."
            raise ValueError(msg)

        history: Any = []
        for key in ("history", "conversationHistory"):
            if isinstance(payload.get(key), list):
                history = payload[key]
                break
        return cls(message=payload["message"], history=history)


@dataclass
class GroundedRequest:
    """Engine output handed to the generation step.

    Parameters
    ----------
    message : str
        The current user query.
    context : ScopedContext
        Selected and rendered knowledge.
    history : list[ConversationMessage]
        Normalized, bounded conversation history.
    """

    message: str
    context: ScopedContext
    history: list[ConversationMessage] = field(default_factory=list)


@dataclass
class ChatResult:
    """Result of a grounded chat turn.

    Parameters
    ----------
    response : str
        Assistant reply text.
    context : ScopedContext
        Knowledge used to ground the reply.
    history : list[ConversationMessage]
        History sent alongside the prompt.
    model : str
        Model identifier used for generation.
    """

    response: str
    context: ScopedContext
    history: list[ConversationMessage] = field(default_factory=list)
    model: str = ""


@dataclass
class PromptSpec:
    """Metadata and template content for a generation prompt.

    Parameters
    ----------
    name : str
        Unique prompt identifier.
    version : str
        Semver-style version string.
    description : str
        Human-readable description.
    system_template : str
        Jinja2 template for the system message.  Receives
        ``knowledge_context`` and ``subject``.
    """

    name: str
    version: str
    description: str
    system_template: str = ""
