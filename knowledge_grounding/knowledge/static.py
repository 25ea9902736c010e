"""Static file-based knowledge source."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from knowledge_grounding.knowledge.base import KnowledgeSource, KnowledgeSourceError, SourceRegistry

logger = logging.getLogger(__name__)

_PATTERNS = ("*.json", "*.yaml", "*.yml")


@SourceRegistry.register("static")
class StaticKnowledgeSource(KnowledgeSource):
    """Knowledge source backed by JSON or YAML files, or in-memory records.

    Each file holds either a list of records or a mapping with a ``rows``
    list.  A directory path loads every ``.json``, ``.yaml`` and ``.yml`` file
    in sorted filename order.

    Parameters
    ----------
    path : str | Path | None
        File or directory containing knowledge records.
    records : list[dict] | None
        Records served directly, bypassing the filesystem.
    """

    name = "static"

    def __init__(self, path: str | Path | None = None, records: list[dict[str, Any]] | None = None) -> None:
        if path is None and records is None:
            msg = "StaticKnowledgeSource needs a path or records"
            raise ValueError(msg)
        self._path = Path(path) if path is not None else None
        self._records = list(records) if records is not None else None

    def fetch_all(self) -> list[dict[str, Any]]:
        """Read all records from the configured path.

        Returns
        -------
        list[dict[str, Any]]

        Raises
        ------
        KnowledgeSourceError
            If the path does not exist or a file cannot be parsed.
        """
        if self._records is not None:
            return list(self._records)

        path = self._path
        if path is not None and path.is_dir():
            files = sorted(p for pattern in _PATTERNS for p in path.glob(pattern))
        elif path is not None and path.is_file():
            files = [path]
        else:
            msg = f"Knowledge path does not exist: {self._path}"
            raise KnowledgeSourceError(msg)

        records: list[dict[str, Any]] = []
        for filepath in files:
            loaded = _read_records(filepath)
            records.extend(loaded)
            logger.debug("Loaded knowledge file: %s (%d records)", filepath, len(loaded))
        return records


def _read_records(path: Path) -> list[dict[str, Any]]:
    """Parse one knowledge file into a list of records."""
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh) if path.suffix == ".json" else yaml.safe_load(fh)
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        msg = f"Could not read knowledge file {path}: {exc}"
        raise KnowledgeSourceError(msg) from exc

    if isinstance(data, dict):
        data = data.get("rows")
    if data is None:
        return []
    if not isinstance(data, list):
        msg = f"Knowledge file {path} must contain a list of records"
        raise KnowledgeSourceError(msg)
    return data
