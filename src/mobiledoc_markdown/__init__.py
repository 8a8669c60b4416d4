"""Render Mobiledoc documents to Markdown."""

__version__ = "0.1.0"

from mobiledoc_markdown.core.renderer import RendererFactory, render
from mobiledoc_markdown.errors import MobiledocRenderError
from mobiledoc_markdown.plugins import IMAGE_CARD, RENDER_TYPE, Atom, Card
from mobiledoc_markdown.renderers import RenderResult

__all__ = [
    "__version__",
    "RendererFactory",
    "RenderResult",
    "render",
    "MobiledocRenderError",
    "IMAGE_CARD",
    "RENDER_TYPE",
    "Atom",
    "Card",
]
