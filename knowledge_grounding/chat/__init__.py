"""Generation adapter: prompts, backends and the chat engine."""

from knowledge_grounding.chat.backends import Backend, BackendRegistry
from knowledge_grounding.chat.engine import ChatEngine
from knowledge_grounding.chat.prompts import PromptRegistry, render_system

__all__ = ["Backend", "BackendRegistry", "ChatEngine", "PromptRegistry", "render_system"]
