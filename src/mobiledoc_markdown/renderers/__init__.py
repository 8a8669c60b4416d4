"""Version-specific Mobiledoc renderers."""

from mobiledoc_markdown.errors import UnsupportedVersionError
from mobiledoc_markdown.renderers.base import (
    BaseRenderer,
    RenderResult,
    lookup_definition,
    walk_markers,
)
from mobiledoc_markdown.renderers.v0_2 import MarkdownRenderer02
from mobiledoc_markdown.renderers.v0_3 import MarkdownRenderer03

__all__ = [
    "BaseRenderer",
    "RenderResult",
    "MarkdownRenderer02",
    "MarkdownRenderer03",
    "lookup_definition",
    "walk_markers",
    "RENDERER_MAP",
    "SUPPORTED_VERSIONS",
    "get_renderer",
]

# Map Mobiledoc versions to renderers
RENDERER_MAP: dict[str, type[BaseRenderer]] = {
    MarkdownRenderer02.version: MarkdownRenderer02,
    MarkdownRenderer03.version: MarkdownRenderer03,
}

SUPPORTED_VERSIONS = tuple(RENDERER_MAP.keys())


def get_renderer(version: str) -> type[BaseRenderer]:
    """Get the renderer class for a Mobiledoc version."""
    if not isinstance(version, str) or version not in RENDERER_MAP:
        raise UnsupportedVersionError(version)
    return RENDERER_MAP[version]
