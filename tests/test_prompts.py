"""Tests for prompt registry and rendering."""

import pytest

from knowledge_grounding.chat.prompts.registry import PromptRegistry, load_prompt_spec
from knowledge_grounding.chat.prompts.renderer import render_system
from knowledge_grounding.models import PromptSpec


def test_builtin_template_loaded():
    registry = PromptRegistry()
    assert "grounded_chat" in registry.available()
    spec = registry.get("grounded_chat")
    assert spec.version == "1.0"
    assert "{{ knowledge_context }}" in spec.system_template


def test_builtin_template_renders_context():
    spec = PromptRegistry().get("grounded_chat")
    text = render_system(spec, {"knowledge_context": "PROJECT: jascore_1_0", "subject": "Jasmine's portfolio"})
    assert "Jasmine's portfolio" in text
    assert text.endswith("PROJECT: jascore_1_0")


def test_get_unknown_raises():
    with pytest.raises(KeyError, match="Unknown prompt"):
        PromptRegistry().get("nonexistent_prompt_xyz")


def test_extra_dir_overrides_builtin(tmp_path):
    (tmp_path / "custom.yaml").write_text(
        'name: grounded_chat\nversion: "2.0"\ndescription: Override\nsystem: "Only: {{ knowledge_context }}"\n',
        encoding="utf-8",
    )
    registry = PromptRegistry(extra_dirs=[tmp_path])
    assert registry.get("grounded_chat").version == "2.0"


def test_missing_extra_dir_is_skipped(tmp_path):
    registry = PromptRegistry(extra_dirs=[tmp_path / "missing"])
    assert "grounded_chat" in registry.available()


def test_register_programmatic():
    registry = PromptRegistry()
    registry.register(PromptSpec(name="custom", version="2.0", description="Custom prompt"))
    assert registry.get("custom").version == "2.0"


def test_load_prompt_spec_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Prompt template not found"):
        load_prompt_spec(tmp_path / "nope.yaml")


def test_load_prompt_spec_defaults_name_to_stem(tmp_path):
    path = tmp_path / "terse.yaml"
    path.write_text("system: Hi\n", encoding="utf-8")
    spec = load_prompt_spec(path)
    assert spec.name == "terse"
    assert spec.version == "0.0"


def test_render_empty_template():
    assert render_system(PromptSpec(name="empty", version="1.0", description=""), {}) == ""
