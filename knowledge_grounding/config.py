"""Unified configuration for knowledge grounding."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_PREFERRED_TYPES: tuple[str, ...] = ("project_summary", "summary", "outcome", "method")
DEFAULT_DEPTH_SCORES: dict[str, int] = {"overview": 2, "supporting_detail": 1}
DEFAULT_FALLBACK_RESPONSE = "I couldn't generate a response based on the current knowledge."


@dataclass
class SourceConfig:
    """Knowledge source configuration.

    Parameters
    ----------
    type : str
        Registered source name (``"postgrest"`` or ``"static"``).
    url : str
        Base URL of the PostgREST / Supabase project.
    api_key : str
        API key sent as ``apikey`` and bearer token.
    table : str
        Table holding knowledge rows.
    order_by : str
        Column giving the stable load order.
    path : str
        File or directory for the static source.
    timeout : float
        Request timeout in seconds.
    extra : dict
        Additional kwargs forwarded to the source constructor.
    """

    type: str = "postgrest"
    url: str = ""
    api_key: str = ""
    table: str = "portfolio-knowledge"
    order_by: str = "id"
    path: str = ""
    timeout: float = 10.0
    extra: dict = field(default_factory=dict)

    @property
    def configured(self) -> bool:
        """Whether enough settings are present to reach the source."""
        if self.type == "static":
            return bool(self.path)
        return bool(self.url and self.api_key)


@dataclass
class ScopeConfig:
    """Relevance filtering and ranking settings.

    Parameters
    ----------
    max_rows : int
        Maximum number of rows rendered into the context.
    preferred_types : tuple[str, ...]
        Content types that earn the type-preference bonus.
    depth_scores : dict[str, int]
        Depth label to depth-preference score.
    """

    max_rows: int = 12
    preferred_types: tuple[str, ...] = DEFAULT_PREFERRED_TYPES
    depth_scores: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_DEPTH_SCORES))

    def __post_init__(self) -> None:
        if self.max_rows <= 0:
            msg = f"max_rows must be > 0, got {self.max_rows}"
            raise ValueError(msg)


@dataclass
class HistoryConfig:
    """Conversation history bounds.

    Parameters
    ----------
    max_messages : int
        Number of most recent history messages kept.
    """

    max_messages: int = 6

    def __post_init__(self) -> None:
        if self.max_messages < 0:
            msg = f"max_messages must be >= 0, got {self.max_messages}"
            raise ValueError(msg)


@dataclass
class BackendConfig:
    """LLM backend configuration.

    Parameters
    ----------
    type : str
        Registered backend name.
    model : str
        Model identifier passed to the backend.
    temperature : float
        Sampling temperature.
    max_tokens : int
        Maximum tokens per completion.
    extra : dict
        Additional kwargs forwarded to the backend constructor.
    """

    type: str = "litellm"
    model: str = "groq/llama-3.1-8b-instant"
    temperature: float = 0.3
    max_tokens: int = 350
    extra: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.model:
            msg = "model must be a non-empty string"
            raise ValueError(msg)
        if self.temperature < 0:
            msg = f"temperature must be >= 0, got {self.temperature}"
            raise ValueError(msg)
        if self.max_tokens <= 0:
            msg = f"max_tokens must be > 0, got {self.max_tokens}"
            raise ValueError(msg)


@dataclass
class ChatConfig:
    """Generation prompt settings.

    Parameters
    ----------
    prompt : str
        Name of a registered prompt spec.
    subject : str
        What the knowledge base describes, substituted into the prompt.
    fallback_response : str
        Reply used when the backend returns an empty completion.
    """

    prompt: str = "grounded_chat"
    subject: str = "this portfolio"
    fallback_response: str = DEFAULT_FALLBACK_RESPONSE


@dataclass
class GroundingConfig:
    """Top-level configuration.

    Parameters
    ----------
    source : SourceConfig
        Knowledge source settings.
    scope : ScopeConfig
        Filtering and ranking settings.
    history : HistoryConfig
        History bounds.
    backend : BackendConfig
        LLM backend settings.
    chat : ChatConfig
        Prompt settings.
    """

    source: SourceConfig = field(default_factory=SourceConfig)
    scope: ScopeConfig = field(default_factory=ScopeConfig)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    backend: BackendConfig = field(default_factory=BackendConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)


def load_config(source: str | Path | dict[str, Any] | None = None) -> GroundingConfig:
    """Load a GroundingConfig from a YAML file, dict, or environment variables.

    Environment variables take precedence over file or dict values.

    Parameters
    ----------
    source : str | Path | dict | None
        A path to a YAML file, a raw dict, or ``None`` to use only
        environment variable overrides on defaults.

    Returns
    -------
    GroundingConfig
    """
    raw: dict[str, Any] = {}

    if isinstance(source, dict):
        raw = source
    elif source is not None:
        path = Path(source)
        if path.is_file():
            raw = _load_yaml(path)

    source_raw = raw.get("source") or {}
    source_known = {"type", "url", "api_key", "table", "order_by", "path", "timeout"}
    source_cfg = SourceConfig(
        type=source_raw.get("type", "postgrest"),
        url=_env("KNOWLEDGE_SOURCE_URL", "NEXT_PUBLIC_SUPABASE_URL", default=source_raw.get("url", "")),
        api_key=_env(
            "KNOWLEDGE_SOURCE_API_KEY",
            "NEXT_PUBLIC_SUPABASE_ANON_KEY",
            default=source_raw.get("api_key", ""),
        ),
        table=source_raw.get("table", "portfolio-knowledge"),
        order_by=source_raw.get("order_by", "id"),
        path=_env("KNOWLEDGE_SOURCE_PATH", default=source_raw.get("path", "")),
        timeout=float(source_raw.get("timeout", 10.0)),
        extra={k: v for k, v in source_raw.items() if k not in source_known},
    )

    scope_raw = raw.get("scope") or {}
    scope_cfg = ScopeConfig(
        max_rows=int(scope_raw.get("max_rows", 12)),
        preferred_types=tuple(scope_raw.get("preferred_types", DEFAULT_PREFERRED_TYPES)),
        depth_scores={str(k): int(v) for k, v in scope_raw.get("depth_scores", DEFAULT_DEPTH_SCORES).items()},
    )

    history_raw = raw.get("history") or {}
    history_cfg = HistoryConfig(max_messages=int(history_raw.get("max_messages", 6)))

    backend_raw = raw.get("backend") or {}
    backend_cfg = BackendConfig(
        type=backend_raw.get("type", "litellm"),
        model=os.environ.get("CHAT_BACKEND_MODEL", backend_raw.get("model", "groq/llama-3.1-8b-instant")),
        temperature=float(os.environ.get("CHAT_BACKEND_TEMPERATURE", backend_raw.get("temperature", 0.3))),
        max_tokens=int(os.environ.get("CHAT_BACKEND_MAX_TOKENS", backend_raw.get("max_tokens", 350))),
        extra={k: v for k, v in backend_raw.items() if k not in {"type", "model", "temperature", "max_tokens"}},
    )

    chat_raw = raw.get("chat") or {}
    chat_cfg = ChatConfig(
        prompt=chat_raw.get("prompt", "grounded_chat"),
        subject=chat_raw.get("subject", "this portfolio"),
        fallback_response=chat_raw.get("fallback_response", DEFAULT_FALLBACK_RESPONSE),
    )

    return GroundingConfig(
        source=source_cfg,
        scope=scope_cfg,
        history=history_cfg,
        backend=backend_cfg,
        chat=chat_cfg,
    )


def _env(*names: str, default: str) -> str:
    """Return the first non-empty environment variable among *names*."""
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return default


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML file using PyYAML."""
    with open(path, encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}
