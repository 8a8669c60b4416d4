"""Card and atom plugin contract.

Cards render block-level embeds and atoms render inline embeds. Both
are supplied by the host application per renderer and must declare the
``markdown`` render type. Plugins are checked when they are registered,
so a misconfigured plugin fails before any document is rendered.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Sequence

from mobiledoc_markdown.errors import (
    AtomNotFoundError,
    CardNotFoundError,
    ConfigurationError,
    PluginValidationError,
)


RENDER_TYPE = "markdown"

TeardownCallback = Callable[[], Any]
RegisterTeardown = Callable[[TeardownCallback], None]


# =============================================================================
# Render arguments
# =============================================================================

@dataclass
class CardEnv:
    """Environment handed to a card render.

    Attributes:
        name: Name the card was looked up by
        on_teardown: Registers a callback fired by the render's teardown
        is_in_editor: Always False when rendering to Markdown
    """

    name: str
    on_teardown: RegisterTeardown
    is_in_editor: bool = False


@dataclass
class CardArgument:
    env: CardEnv
    options: Any
    payload: Any = field(default_factory=dict)


@dataclass
class AtomEnv:
    name: str
    on_teardown: RegisterTeardown


@dataclass
class AtomArgument:
    """Argument handed to an atom render.

    Attributes:
        env: Atom name and teardown registration
        options: The renderer's ``card_options``, passed through unchanged
        value: Text value stored with the atom definition
        payload: Arbitrary payload stored with the atom definition
    """

    env: AtomEnv
    options: Any
    value: Any
    payload: Any = None


RenderFunction = Callable[[Any], Optional[str]]


# =============================================================================
# Plugins
# =============================================================================

@dataclass
class Plugin:
    """A named renderer for an embedded widget.

    Attributes:
        name: Name that documents use to reference the plugin
        render: Callable receiving the render argument and returning
            Markdown text or None
        type: Render type; must be ``"markdown"`` for this renderer
    """

    name: str
    render: Optional[RenderFunction] = None
    type: str = RENDER_TYPE


@dataclass
class Card(Plugin):
    """Block-level plugin, rendered inside its own container."""


@dataclass
class Atom(Plugin):
    """Inline plugin, rendered in place inside a marker run."""


def default_unknown_card_handler(arg: CardArgument) -> Optional[str]:
    """Fallback used when no ``unknown_card_handler`` is configured."""
    raise CardNotFoundError(arg.env.name)


def default_unknown_atom_handler(arg: AtomArgument) -> Optional[str]:
    """Fallback used when no ``unknown_atom_handler`` is configured."""
    raise AtomNotFoundError(arg.env.name)


def validate_plugins(
    plugins: Optional[Sequence[Any]],
    kind: str,
    option_name: str,
) -> list[Any]:
    """Check a configured list of cards or atoms.

    Args:
        plugins: The configured sequence, or None for an empty one
        kind: ``"Card"`` or ``"Atom"``, used in error messages
        option_name: Renderer option the sequence was passed as

    Returns:
        The plugins as a list

    Raises:
        ConfigurationError: If *plugins* is not a list or tuple
        PluginValidationError: If a plugin has the wrong type or no render
    """
    if plugins is None:
        return []
    if not isinstance(plugins, (list, tuple)):
        raise ConfigurationError(f"`{option_name}` must be passed as an array")

    for plugin in plugins:
        name = getattr(plugin, "name", None)
        plugin_type = getattr(plugin, "type", None)
        if plugin_type != RENDER_TYPE:
            raise PluginValidationError(
                f'{kind} "{name}" must be of type "{RENDER_TYPE}", '
                f'was "{plugin_type}"'
            )
        if not callable(getattr(plugin, "render", None)):
            raise PluginValidationError(
                f'{kind} "{name}" must define a `render` method'
            )
    return list(plugins)


def find_plugin(plugins: Iterable[Any], name: str) -> Optional[Any]:
    """Return the first plugin registered under *name*."""
    for plugin in plugins:
        if plugin.name == name:
            return plugin
    return None
