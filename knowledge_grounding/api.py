"""Package-level entry points: ground a request and answer it."""

from __future__ import annotations

import logging
import time
from collections.abc import Collection, Mapping
from typing import Any

from knowledge_grounding.chat.engine import ChatEngine
from knowledge_grounding.config import GroundingConfig, load_config
from knowledge_grounding.history import MAX_HISTORY_MESSAGES, normalize_history, truncate_history
from knowledge_grounding.knowledge.store import KnowledgeStore
from knowledge_grounding.models import ChatRequest, ChatResult, GroundedRequest
from knowledge_grounding.scope.pipeline import MAX_ROWS, scope_knowledge
from knowledge_grounding.scope.ranker import DEPTH_SCORES, PREFERRED_TYPES

logger = logging.getLogger(__name__)


class GroundingPipeline:
    """Bound the history, load the corpus and scope it to the query.

    Parameters
    ----------
    store : KnowledgeStore
        Cache of the knowledge corpus.
    max_rows : int
        Maximum number of rows in the rendered context.
    max_history : int
        Maximum number of history messages kept.
    preferred_types : Collection[str]
        Content types that earn the type bonus.
    depth_scores : Mapping[str, int]
        Depth label to score.
    """

    def __init__(
        self,
        store: KnowledgeStore,
        *,
        max_rows: int = MAX_ROWS,
        max_history: int = MAX_HISTORY_MESSAGES,
        preferred_types: Collection[str] = PREFERRED_TYPES,
        depth_scores: Mapping[str, int] = DEPTH_SCORES,
    ) -> None:
        self._store = store
        self._max_rows = max_rows
        self._max_history = max_history
        self._preferred_types = preferred_types
        self._depth_scores = depth_scores

    @classmethod
    def from_config(
        cls,
        config: GroundingConfig | dict | str | None = None,
        *,
        store: KnowledgeStore | None = None,
    ) -> GroundingPipeline:
        """Construct a pipeline from a config object or raw source.

        Parameters
        ----------
        config : GroundingConfig | dict | str | None
            A ``GroundingConfig``, a dict, a YAML file path, or ``None``.
        store : KnowledgeStore | None
            Existing store to reuse; built from ``config.source`` if omitted.

        Returns
        -------
        GroundingPipeline
        """
        if not isinstance(config, GroundingConfig):
            config = load_config(config)
        return cls(
            store if store is not None else KnowledgeStore.from_config(config),
            max_rows=config.scope.max_rows,
            max_history=config.history.max_messages,
            preferred_types=config.scope.preferred_types,
            depth_scores=config.scope.depth_scores,
        )

    @property
    def store(self) -> KnowledgeStore:
        """The knowledge store backing this pipeline."""
        return self._store

    def ground(self, request: ChatRequest) -> GroundedRequest:
        """Produce the scoped context and bounded history for *request*.

        Parameters
        ----------
        request : ChatRequest
            Parsed inbound request.

        Returns
        -------
        GroundedRequest
        """
        history = truncate_history(normalize_history(request.history), self._max_history)
        rows = self._store.load()
        context = scope_knowledge(
            request.message,
            rows,
            max_rows=self._max_rows,
            preferred_types=self._preferred_types,
            depth_scores=self._depth_scores,
        )
        logger.debug(
            "Scoped knowledge total=%d matched=%s selected=%d history=%d",
            context.total,
            context.matched,
            len(context.rows),
            len(history),
        )
        return GroundedRequest(message=request.message, context=context, history=history)


class ChatService:
    """Answer chat payloads with knowledge-grounded replies.

    Parameters
    ----------
    pipeline : GroundingPipeline
        Grounding pipeline.
    engine : ChatEngine
        Generation engine.
    """

    def __init__(self, pipeline: GroundingPipeline, engine: ChatEngine) -> None:
        self._pipeline = pipeline
        self._engine = engine

    @classmethod
    def from_config(cls, config: GroundingConfig | dict | str | None = None) -> ChatService:
        """Construct a ChatService from a config object or raw source.

        Parameters
        ----------
        config : GroundingConfig | dict | str | None
            A ``GroundingConfig``, a dict, a YAML file path, or ``None``.

        Returns
        -------
        ChatService
        """
        if not isinstance(config, GroundingConfig):
            config = load_config(config)
        return cls(GroundingPipeline.from_config(config), ChatEngine.from_config(config))

    @property
    def pipeline(self) -> GroundingPipeline:
        """The grounding pipeline used by this service."""
        return self._pipeline

    def chat(self, payload: Mapping[str, Any] | ChatRequest) -> ChatResult:
        """Answer one chat turn.

        Parameters
        ----------
        payload : Mapping[str, Any] | ChatRequest
            Decoded request body with ``message`` and optional ``history``
            (or ``conversationHistory``), or an already parsed request.

        Returns
        -------
        ChatResult

        Raises
        ------
        ValueError
            If the payload carries no string ``message``.
        """
        start = time.perf_counter()
        request = payload if isinstance(payload, ChatRequest) else ChatRequest.from_payload(payload)
        grounded = self._pipeline.ground(request)
        response = self._engine.respond(grounded)
        logger.info("Chat turn took %.1f ms", (time.perf_counter() - start) * 1000)
        return ChatResult(
            response=response,
            context=grounded.context,
            history=grounded.history,
            model=self._engine.model,
        )
