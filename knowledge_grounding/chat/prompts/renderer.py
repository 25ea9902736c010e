"""Template rendering for prompt specs."""

from __future__ import annotations

from typing import Any

import jinja2

from knowledge_grounding.models import PromptSpec

_ENV = jinja2.Environment(undefined=jinja2.Undefined, keep_trailing_newline=False)


def render_system(spec: PromptSpec, variables: dict[str, Any]) -> str:
    """Render the system message of *spec*.

    Parameters
    ----------
    spec : PromptSpec
        The prompt template to render.
    variables : dict[str, Any]
        Template variables (``knowledge_context``, ``subject``).

    Returns
    -------
    str
        Rendered text with surrounding whitespace stripped; empty if the
        spec has no system template.
    """
    if not spec.system_template:
        return ""
    return _ENV.from_string(spec.system_template).render(**variables).strip()
