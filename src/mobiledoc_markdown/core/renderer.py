"""Public entry point: pick a version renderer and render a Mobiledoc."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

from mobiledoc_markdown.config import get_settings
from mobiledoc_markdown.errors import ConfigurationError, MobiledocJSONError
from mobiledoc_markdown.plugins.base import (
    Atom,
    AtomArgument,
    Card,
    validate_plugins,
)
from mobiledoc_markdown.renderers import RenderResult, get_renderer
from mobiledoc_markdown.renderers.v0_2 import MOBILEDOC_VERSION as DEFAULT_VERSION

logger = logging.getLogger(__name__)

UnknownHandler = Callable[[Any], Optional[str]]


def skip_unknown(arg: Any) -> Optional[str]:
    """Unknown card/atom handler that renders nothing."""
    return None


def render_atom_value(arg: AtomArgument) -> Optional[str]:
    """Unknown atom handler that renders the atom's stored value as text."""
    if arg.value is None:
        return None
    return str(arg.value)


_CARD_POLICIES: dict[str, Optional[UnknownHandler]] = {
    "error": None,
    "skip": skip_unknown,
}

_ATOM_POLICIES: dict[str, Optional[UnknownHandler]] = {
    "error": None,
    "skip": skip_unknown,
    "value": render_atom_value,
}


def handler_for_policy(policy: str, kind: str = "card") -> Optional[UnknownHandler]:
    """Map an ``unknown_cards``/``unknown_atoms`` policy name to a handler.

    ``error`` maps to None, which leaves the default handler (raise) in
    place.
    """
    policies = _ATOM_POLICIES if kind == "atom" else _CARD_POLICIES
    if policy not in policies:
        raise ConfigurationError(
            f"Unknown {kind} policy: {policy}. "
            f"Supported policies: {', '.join(policies)}"
        )
    return policies[policy]


class RendererFactory:
    """Render Mobiledoc documents of any supported version to Markdown.

    Usage::

        factory = RendererFactory(cards=[my_card], card_options={"x": 1})
        result, teardown = factory.render(mobiledoc)
        ...
        teardown()

    Every call to :meth:`render` builds a fresh version renderer, so each
    returned ``teardown`` only fires callbacks registered during its own
    render.
    """

    def __init__(
        self,
        cards: Optional[Sequence[Card]] = None,
        atoms: Optional[Sequence[Atom]] = None,
        card_options: Any = None,
        unknown_card_handler: Optional[UnknownHandler] = None,
        unknown_atom_handler: Optional[UnknownHandler] = None,
    ) -> None:
        """Initialize the factory.

        Args:
            cards: Card plugins available to every render
            atoms: Atom plugins available to every 0.3.0 render
            card_options: Passed unchanged to card and atom renders
            unknown_card_handler: Render function for unmatched cards
            unknown_atom_handler: Render function for unmatched atoms

        Raises:
            ConfigurationError: If cards or atoms are not a list
            PluginValidationError: If a card or atom breaks the contract
        """
        self.cards = validate_plugins(cards, "Card", "cards")
        self.atoms = validate_plugins(atoms, "Atom", "atoms")
        self.card_options = {} if card_options is None else card_options
        self.unknown_card_handler = unknown_card_handler
        self.unknown_atom_handler = unknown_atom_handler

    def render(self, mobiledoc: dict) -> RenderResult:
        """Render a parsed Mobiledoc to Markdown.

        Documents without a ``version`` are treated as 0.2.0.

        Raises:
            MobiledocRenderError: For any fatal input error
        """
        if not isinstance(mobiledoc, dict):
            raise MobiledocJSONError(
                f"Expected a Mobiledoc object, got {type(mobiledoc).__name__}"
            )

        version = mobiledoc.get("version")
        if version is None:
            logger.debug("Mobiledoc has no version, assuming %s", DEFAULT_VERSION)
            version = DEFAULT_VERSION
            mobiledoc = {**mobiledoc, "version": version}

        renderer_class = get_renderer(version)
        logger.debug("Using %s for Mobiledoc %s", renderer_class.__name__, version)
        renderer = renderer_class(
            mobiledoc,
            cards=self.cards,
            card_options=self.card_options,
            atoms=self.atoms,
            unknown_card_handler=self.unknown_card_handler,
            unknown_atom_handler=self.unknown_atom_handler,
        )
        return renderer.render()

    def render_json(self, text: str) -> RenderResult:
        """Decode *text* as JSON and render it."""
        try:
            mobiledoc = json.loads(text)
        except json.JSONDecodeError as e:
            raise MobiledocJSONError(f"Invalid Mobiledoc JSON: {e}") from e
        return self.render(mobiledoc)

    def render_file(
        self,
        input_path: Path,
        output_path: Optional[Path] = None,
        encoding: Optional[str] = None,
    ) -> RenderResult:
        """Render a ``.json`` Mobiledoc file.

        Args:
            input_path: Path to the Mobiledoc JSON file
            output_path: Where to write the Markdown; nothing is written
                when None
            encoding: Text encoding for both files (default from settings)

        Returns:
            The render result; the caller owns calling ``teardown``
        """
        encoding = encoding or get_settings().encoding
        input_path = Path(input_path)

        rendered = self.render_json(input_path.read_text(encoding=encoding))

        if output_path is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered.result, encoding=encoding)
            logger.debug("Wrote %d characters to %s", len(rendered.result), output_path)

        return rendered


def render(mobiledoc: dict, **options: Any) -> RenderResult:
    """Render *mobiledoc* with a one-off :class:`RendererFactory`."""
    return RendererFactory(**options).render(mobiledoc)
