"""OpenAI-compatible LLM backend (OpenAI, Groq, Azure OpenAI)."""

from __future__ import annotations

import logging
from typing import Any

import openai

from knowledge_grounding.chat.backends.base import Backend, BackendRegistry

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"


@BackendRegistry.register("openai")
class OpenAIBackend(Backend):
    """Backend powered by an OpenAI-compatible Chat Completions API.

    Parameters
    ----------
    model : str
        Default model identifier (e.g. ``"llama-3.1-8b-instant"`` on Groq).
    api_key : str | None
        API key.  Falls back to ``OPENAI_API_KEY``.
    base_url : str | None
        Custom base URL, e.g. ``GROQ_BASE_URL``.
    max_tokens : int
        Default max tokens for completions.
    client : openai.OpenAI | None
        Pre-built client, mainly for tests.
    """

    name = "openai"

    def __init__(
        self,
        model: str = "llama-3.1-8b-instant",
        api_key: str | None = None,
        base_url: str | None = None,
        max_tokens: int = 350,
        client: Any = None,
    ) -> None:
        self._model = model
        self._max_tokens = max_tokens
        if client is None:
            kwargs: dict[str, Any] = {}
            if api_key:
                kwargs["api_key"] = api_key
            if base_url:
                kwargs["base_url"] = base_url
            client = openai.OpenAI(**kwargs)
        self._client = client

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 350,
    ) -> str:
        """Call the Chat Completions API and return the message text."""
        kwargs: dict[str, Any] = {
            "model": model or self._model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens or self._max_tokens,
        }
        logger.debug("OpenAI request model=%s messages=%d", kwargs["model"], len(messages))
        response = self._client.chat.completions.create(**kwargs)
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
