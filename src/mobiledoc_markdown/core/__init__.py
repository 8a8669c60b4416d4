"""High-level rendering API for mobiledoc-markdown."""

from mobiledoc_markdown.core.renderer import (
    RendererFactory,
    handler_for_policy,
    render,
    render_atom_value,
    skip_unknown,
)

__all__ = [
    "RendererFactory",
    "handler_for_policy",
    "render",
    "render_atom_value",
    "skip_unknown",
]
