"""Renderer for Mobiledoc 0.3.0.

0.3.0 moves card and atom definitions into top-level ``cards`` and
``atoms`` tables that sections and marker runs reference by index, and
adds a kind discriminant to each marker run so a run can hold an atom
instead of text.
"""

import logging
from typing import Any, Sequence

from mobiledoc_markdown.errors import UnknownMarkerTypeError
from mobiledoc_markdown.formatting.sections import (
    AtomRun,
    CardSection,
    MarkerRun,
    MarkerType,
    MarkupType,
    TextRun,
)
from mobiledoc_markdown.formatting.tree import Node, create_text_node
from mobiledoc_markdown.plugins.base import (
    Atom,
    AtomArgument,
    AtomEnv,
    find_plugin,
)
from mobiledoc_markdown.renderers.base import BaseRenderer, lookup_definition

logger = logging.getLogger(__name__)

MOBILEDOC_VERSION = "0.3.0"


class MarkdownRenderer03(BaseRenderer):
    """Render a 0.3.0 Mobiledoc, including inline atoms."""

    version = MOBILEDOC_VERSION
    supports_atoms = True

    def load(self, mobiledoc: dict) -> None:
        # Nested documents rendered from cards often omit the empty tables
        self.sections = list(mobiledoc.get("sections") or [])
        self.atom_types = list(mobiledoc.get("atoms") or [])
        self.card_types = list(mobiledoc.get("cards") or [])
        self.markup_types = [
            MarkupType.from_raw(raw) for raw in mobiledoc.get("markups") or []
        ]

    def parse_markers(self, raw_markers: Sequence[Any]) -> list[MarkerRun]:
        runs: list[MarkerRun] = []
        for raw_type, open_indices, close_count, value in raw_markers:
            if isinstance(raw_type, bool):
                raise UnknownMarkerTypeError(raw_type)
            try:
                marker_type = MarkerType(raw_type)
            except (ValueError, TypeError):
                raise UnknownMarkerTypeError(raw_type) from None

            open_indices = list(open_indices or [])
            close_count = close_count or 0
            if marker_type == MarkerType.ATOM:
                runs.append(AtomRun(open_indices, close_count, atom_index=value))
            else:
                runs.append(TextRun(open_indices, close_count, text=value))
        return runs

    def parse_card_section(self, raw_section: Sequence[Any]) -> CardSection:
        index = raw_section[1] if len(raw_section) > 1 else None
        card_type = lookup_definition(self.card_types, index, "card")
        name = card_type[0]
        payload = card_type[1] if len(card_type) > 1 else None
        return CardSection(name=name, payload=payload)

    # -- atoms --------------------------------------------------------------

    def find_atom(self, name: str) -> Any:
        atom = find_plugin(self.atoms, name)
        if atom is not None:
            return atom
        logger.debug("Atom %r not registered, using unknown atom handler", name)
        return Atom(name=name, render=self.unknown_atom_handler)

    def render_atom(self, atom_index: int) -> Node:
        atom_type = lookup_definition(self.atom_types, atom_index, "atom")
        name = atom_type[0]
        value = atom_type[1] if len(atom_type) > 1 else None
        payload = atom_type[2] if len(atom_type) > 2 else None

        atom = self.find_atom(name)
        arg = AtomArgument(
            env=AtomEnv(name=atom.name, on_teardown=self._register_teardown_callback),
            options=self.card_options,
            value=value,
            payload=payload,
        )
        rendered = atom.render(arg)
        self._validate_render_result(rendered, "Atom", atom.name)

        return create_text_node(rendered or "")
