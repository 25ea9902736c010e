"""Prompt management: registry, rendering, and built-in templates."""

from knowledge_grounding.chat.prompts.registry import PromptRegistry, load_prompt_spec
from knowledge_grounding.chat.prompts.renderer import render_system

__all__ = ["PromptRegistry", "load_prompt_spec", "render_system"]
