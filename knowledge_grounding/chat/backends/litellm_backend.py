"""LiteLLM backend; the default route to Groq-hosted models."""

from __future__ import annotations

import logging
from typing import Any

import litellm

from knowledge_grounding.chat.backends.base import Backend, BackendRegistry

logger = logging.getLogger(__name__)


@BackendRegistry.register("litellm")
class LiteLLMBackend(Backend):
    """Backend powered by LiteLLM's unified completion interface.

    Parameters
    ----------
    model : str
        Model identifier in LiteLLM format (e.g. ``"groq/llama-3.1-8b-instant"``).
    api_key : str | None
        Provider API key.  Falls back to the provider's env var
        (``GROQ_API_KEY`` for Groq models).
    max_tokens : int
        Default max tokens for completions.
    """

    name = "litellm"

    def __init__(
        self,
        model: str = "groq/llama-3.1-8b-instant",
        api_key: str | None = None,
        max_tokens: int = 350,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._max_tokens = max_tokens

    def complete(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 350,
    ) -> str:
        """Call LiteLLM's completion endpoint and return the message text."""
        kwargs: dict[str, Any] = {
            "model": model or self._model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens or self._max_tokens,
        }
        if self._api_key:
            kwargs["api_key"] = self._api_key

        logger.debug("LiteLLM request model=%s messages=%d", kwargs["model"], len(messages))
        response = litellm.completion(**kwargs)
        return response.choices[0].message.content or ""
