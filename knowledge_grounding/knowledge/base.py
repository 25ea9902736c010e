"""Knowledge source protocol and registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class KnowledgeSourceError(RuntimeError):
    """Raised when a knowledge source cannot return its records."""


class KnowledgeSource(ABC):
    """Bulk reader for the knowledge corpus.

    Subclasses must set ``name`` and implement ``fetch_all``.
    """

    name: str = ""

    @abstractmethod
    def fetch_all(self) -> list[dict[str, Any]]:
        """Return every knowledge record, stably ordered.

        Returns
        -------
        list[dict[str, Any]]
            Raw records in the source's load order.

        Raises
        ------
        KnowledgeSourceError
            If the records cannot be read.
        """


class SourceRegistry:
    """Discover and instantiate registered knowledge sources."""

    _sources: dict[str, type[KnowledgeSource]] = {}

    @classmethod
    def register(cls, name: str):
        """Class decorator that registers a source under *name*.

        Parameters
        ----------
        name : str
            Lookup key used in configuration files.

        Returns
        -------
        Callable
            The original class, unmodified.
        """

        def decorator(klass: type[KnowledgeSource]) -> type[KnowledgeSource]:
            cls._sources[name] = klass
            return klass

        return decorator

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> KnowledgeSource:
        """Instantiate a registered source.

        Parameters
        ----------
        name : str
            Registered source name.
        **kwargs
            Forwarded to the source constructor.

        Returns
        -------
        KnowledgeSource

        Raises
        ------
        KeyError
            If *name* is not registered.
        """
        if name not in cls._sources:
            available = ", ".join(sorted(cls._sources)) or "(none)"
            msg = f"Unknown knowledge source {name!r}. Available: {available}"
            raise KeyError(msg)
        return cls._sources[name](**kwargs)

    @classmethod
    def available(cls) -> list[str]:
        """Return sorted list of registered source names."""
        return sorted(cls._sources)
