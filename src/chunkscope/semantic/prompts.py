"""Jinja2 prompt templates for semantic splitting.

Templates ship in ``chunkscope/templates/``:
  - ``semantic_system.txt.j2``: instructions to the model
  - ``semantic_user.txt.j2``: the document wrapped in triple quotes
"""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import jinja2

from chunkscope.exceptions import SemanticChunkError

__all__ = ["render_system_prompt", "render_user_prompt"]

logger = logging.getLogger(__name__)

SYSTEM_TEMPLATE = "semantic_system.txt.j2"
USER_TEMPLATE = "semantic_user.txt.j2"


@functools.lru_cache(maxsize=1)
def _get_environment() -> jinja2.Environment:
    """Build the template environment once, lazily."""
    from importlib.resources import files

    template_dir = Path(str(files("chunkscope") / "templates"))
    if not template_dir.is_dir():
        raise SemanticChunkError(
            "Built-in template directory not found; installation may be corrupted"
        )
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def _render(template_name: str, **context: object) -> str:
    try:
        template = _get_environment().get_template(template_name)
        return template.render(**context)
    except jinja2.TemplateError as e:
        raise SemanticChunkError(f"Failed to render prompt {template_name}: {e}") from e


def render_system_prompt() -> str:
    """Instructions asking for a raw JSON array of verbatim substrings."""
    return _render(SYSTEM_TEMPLATE)


def render_user_prompt(text: str) -> str:
    """The document to split, fenced with triple quotes."""
    return _render(USER_TEMPLATE, text=text)
