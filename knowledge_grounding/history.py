"""Conversation history normalization and bounding."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from knowledge_grounding.models import ConversationMessage

MAX_HISTORY_MESSAGES = 6

ASSISTANT = "assistant"
USER = "user"


def normalize_history(raw: Any) -> list[ConversationMessage]:
    """Map an externally supplied history into canonical messages.

    Anything other than a list or tuple is treated as empty.  A role is
    ``"assistant"`` only on an exact match, otherwise ``"user"``.  Content is
    coerced to text and trimmed; messages left empty are dropped.

    Parameters
    ----------
    raw : Any
        History as received in the request payload.

    Returns
    -------
    list[ConversationMessage]
    """
    if not isinstance(raw, (list, tuple)):
        return []

    messages: list[ConversationMessage] = []
    for element in raw:
        role = _field(element, "role")
        content = _field(element, "content")
        text = "" if content is None else str(content).strip()
        if not text:
            continue
        messages.append(ConversationMessage(role=ASSISTANT if role == ASSISTANT else USER, content=text))
    return messages


def truncate_history(messages: list[ConversationMessage], max_count: int) -> list[ConversationMessage]:
    """Keep the last *max_count* messages, preserving order.

    Parameters
    ----------
    messages : list[ConversationMessage]
        Normalized history.
    max_count : int
        Maximum number of messages to keep.

    Returns
    -------
    list[ConversationMessage]
    """
    if max_count <= 0:
        return []
    return list(messages[-max_count:])


def _field(element: Any, name: str) -> Any:
    if isinstance(element, Mapping):
        return element.get(name)
    return getattr(element, name, None)
