"""Card and atom plugins for the Markdown renderer."""

from mobiledoc_markdown.plugins.base import (
    RENDER_TYPE,
    Atom,
    AtomArgument,
    AtomEnv,
    Card,
    CardArgument,
    CardEnv,
    Plugin,
    default_unknown_atom_handler,
    default_unknown_card_handler,
    find_plugin,
    validate_plugins,
)
from mobiledoc_markdown.plugins.image import IMAGE_CARD

__all__ = [
    "RENDER_TYPE",
    "Atom",
    "AtomArgument",
    "AtomEnv",
    "Card",
    "CardArgument",
    "CardEnv",
    "Plugin",
    "IMAGE_CARD",
    "default_unknown_atom_handler",
    "default_unknown_card_handler",
    "find_plugin",
    "validate_plugins",
]
