"""Process-lifetime cache of the knowledge corpus."""

from __future__ import annotations

import logging
import threading
import time

from knowledge_grounding.config import GroundingConfig, SourceConfig
from knowledge_grounding.knowledge.base import KnowledgeSource, KnowledgeSourceError, SourceRegistry
from knowledge_grounding.models import KnowledgeRow

logger = logging.getLogger(__name__)


class KnowledgeStore:
    """Load the knowledge corpus once and serve it from memory.

    The first successful ``load`` fetches every record from the source and
    caches the coerced rows; later calls never touch the source again.  A
    failed fetch is not cached, so the next call retries.  Concurrent first
    callers are collapsed into a single fetch.

    Parameters
    ----------
    source : KnowledgeSource | None
        Backing collaborator.  ``None`` means the source is not configured and
        ``load`` always returns an empty corpus.
    """

    def __init__(self, source: KnowledgeSource | None) -> None:
        self._source = source
        self._rows: tuple[KnowledgeRow, ...] | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: GroundingConfig | SourceConfig) -> KnowledgeStore:
        """Construct a store whose source is described by *config*.

        Parameters
        ----------
        config : GroundingConfig | SourceConfig
            Full configuration or just its source section.

        Returns
        -------
        KnowledgeStore
        """
        source_cfg = config.source if isinstance(config, GroundingConfig) else config
        if not source_cfg.configured:
            logger.warning("Knowledge source %r is not configured; corpus will be empty", source_cfg.type)
            return cls(None)

        if source_cfg.type == "static":
            kwargs = {"path": source_cfg.path}
        else:
            kwargs = {
                "url": source_cfg.url,
                "api_key": source_cfg.api_key,
                "table": source_cfg.table,
                "order_by": source_cfg.order_by,
                "timeout": source_cfg.timeout,
            }
        return cls(SourceRegistry.create(source_cfg.type, **kwargs, **source_cfg.extra))

    @property
    def loaded(self) -> bool:
        """Whether the corpus has been loaded."""
        return self._rows is not None

    def load(self) -> tuple[KnowledgeRow, ...]:
        """Return the knowledge corpus, fetching it on first use.

        Never raises: a missing source or a failed fetch is logged and yields
        an empty tuple.

        Returns
        -------
        tuple[KnowledgeRow, ...]
            Rows in source load order.
        """
        rows = self._rows
        if rows is not None:
            return rows

        if self._source is None:
            logger.warning("Knowledge source not initialized; skipping knowledge fetch")
            return ()

        with self._lock:
            if self._rows is not None:
                return self._rows

            start = time.perf_counter()
            try:
                records = self._source.fetch_all()
            except KnowledgeSourceError as exc:
                logger.error("Knowledge fetch from source=%s failed: %s", self._source.name, exc)
                return ()
            except Exception:
                logger.exception("Unexpected error fetching knowledge from source=%s", self._source.name)
                return ()
            finally:
                logger.info(
                    "Knowledge fetch from source=%s took %.1f ms",
                    self._source.name,
                    (time.perf_counter() - start) * 1000,
                )

            if not isinstance(records, (list, tuple)):
                logger.error(
                    "Knowledge source=%s returned %s, expected a list of records",
                    self._source.name,
                    type(records).__name__,
                )
                return ()

            self._rows = _coerce_rows(records)
            logger.info("Cached %d knowledge rows", len(self._rows))
            return self._rows


def _coerce_rows(records: list | tuple) -> tuple[KnowledgeRow, ...]:
    """Convert raw records to rows, skipping malformed ones."""
    rows: list[KnowledgeRow] = []
    for index, record in enumerate(records):
        try:
            rows.append(KnowledgeRow.from_record(record))
        except ValueError as exc:
            logger.warning("Skipping knowledge record %d: %s", index, exc)
    return tuple(rows)
