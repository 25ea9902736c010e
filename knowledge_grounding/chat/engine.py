"""ChatEngine: turns a grounded request into an assistant reply."""

from __future__ import annotations

import logging
import time

from knowledge_grounding.chat.backends import BackendRegistry
from knowledge_grounding.chat.backends.base import Backend
from knowledge_grounding.chat.prompts.registry import PromptRegistry
from knowledge_grounding.chat.prompts.renderer import render_system
from knowledge_grounding.config import DEFAULT_FALLBACK_RESPONSE, GroundingConfig, load_config
from knowledge_grounding.models import GroundedRequest, PromptSpec

logger = logging.getLogger(__name__)


class ChatEngine:
    """Build the chat message list for a grounded request and call a backend.

    Parameters
    ----------
    backend : Backend
        LLM backend for completions.
    spec : PromptSpec
        Prompt whose system template receives the rendered knowledge.
    subject : str
        What the knowledge base describes, passed to the template.
    default_model : str | None
        Default model override for the backend.
    temperature : float
        Sampling temperature.
    max_tokens : int
        Max tokens per completion.
    fallback_response : str
        Reply used when the backend returns nothing.
    """

    def __init__(
        self,
        backend: Backend,
        spec: PromptSpec,
        *,
        subject: str = "this portfolio",
        default_model: str | None = None,
        temperature: float = 0.3,
        max_tokens: int = 350,
        fallback_response: str = DEFAULT_FALLBACK_RESPONSE,
    ) -> None:
        self._backend = backend
        self._spec = spec
        self._subject = subject
        self._default_model = default_model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._fallback_response = fallback_response

    @classmethod
    def from_config(
        cls,
        config: GroundingConfig | dict | str | None = None,
        *,
        prompts: PromptRegistry | None = None,
    ) -> ChatEngine:
        """Construct a ChatEngine from a config object or raw source.

        Parameters
        ----------
        config : GroundingConfig | dict | str | None
            A ``GroundingConfig``, a dict, a YAML file path, or ``None``
            for defaults.
        prompts : PromptRegistry | None
            Registry to resolve ``config.chat.prompt`` from; built-ins if
            omitted.

        Returns
        -------
        ChatEngine
        """
        if not isinstance(config, GroundingConfig):
            config = load_config(config)

        backend = BackendRegistry.create(
            config.backend.type,
            model=config.backend.model,
            max_tokens=config.backend.max_tokens,
            **config.backend.extra,
        )
        spec = (prompts or PromptRegistry()).get(config.chat.prompt)

        return cls(
            backend=backend,
            spec=spec,
            subject=config.chat.subject,
            default_model=config.backend.model,
            temperature=config.backend.temperature,
            max_tokens=config.backend.max_tokens,
            fallback_response=config.chat.fallback_response,
        )

    @property
    def model(self) -> str:
        """Model identifier used for completions."""
        return self._default_model or ""

    def build_messages(self, grounded: GroundedRequest) -> list[dict[str, str]]:
        """Lay out system prompt, bounded history, then the current user turn.

        Parameters
        ----------
        grounded : GroundedRequest
            Output of the grounding pipeline.

        Returns
        -------
        list[dict[str, str]]
        """
        system_text = render_system(
            self._spec,
            {"knowledge_context": grounded.context.text, "subject": self._subject},
        )
        messages: list[dict[str, str]] = []
        if system_text:
            messages.append({"role": "system", "content": system_text})
        messages.extend(m.to_dict() for m in grounded.history)
        messages.append({"role": "user", "content": grounded.message})
        return messages

    def respond(self, grounded: GroundedRequest) -> str:
        """Generate a reply for *grounded*.

        Parameters
        ----------
        grounded : GroundedRequest
            Output of the grounding pipeline.

        Returns
        -------
        str
            Stripped completion, or the fallback response if it is empty.
        """
        messages = self.build_messages(grounded)
        start = time.perf_counter()
        raw = self._backend.complete(
            messages,
            model=self._default_model,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
        logger.info(
            "Generation backend=%s model=%s took %.1f ms",
            self._backend.name,
            self.model,
            (time.perf_counter() - start) * 1000,
        )
        content = (raw or "").strip()
        return content if content else self._fallback_response
