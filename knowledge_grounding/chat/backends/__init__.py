"""LLM backend abstraction and registry."""

from knowledge_grounding.chat.backends.base import Backend, BackendRegistry

__all__ = ["Backend", "BackendRegistry"]

# Each module registers itself via @BackendRegistry.register on import.


def _auto_register() -> None:
    """Import the built-in backends, triggering their registration decorators."""
    import importlib

    for mod in ("litellm_backend", "openai_backend"):
        importlib.import_module(f"knowledge_grounding.chat.backends.{mod}")


_auto_register()
