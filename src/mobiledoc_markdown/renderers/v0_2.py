"""Renderer for Mobiledoc 0.2.0.

In 0.2.0 the ``sections`` field holds ``[markupTypes, sections]``,
marker runs are ``[openIndices, closeCount, text]`` and card sections
embed the card name and payload directly.
"""

from typing import Any, Sequence

from mobiledoc_markdown.formatting.sections import (
    CardSection,
    MarkerRun,
    MarkupType,
    TextRun,
)
from mobiledoc_markdown.renderers.base import BaseRenderer


MOBILEDOC_VERSION = "0.2.0"


class MarkdownRenderer02(BaseRenderer):
    """Render a 0.2.0 Mobiledoc. Atoms do not exist in this version."""

    version = MOBILEDOC_VERSION
    supports_atoms = False

    def load(self, mobiledoc: dict) -> None:
        section_data = mobiledoc.get("sections") or []
        markup_types = section_data[0] if len(section_data) > 0 else []
        sections = section_data[1] if len(section_data) > 1 else []

        self.markup_types = [MarkupType.from_raw(raw) for raw in markup_types or []]
        self.sections = list(sections or [])

    def parse_markers(self, raw_markers: Sequence[Any]) -> list[MarkerRun]:
        return [
            TextRun(
                open_indices=list(open_indices or []),
                close_count=close_count or 0,
                text=text,
            )
            for open_indices, close_count, text in raw_markers
        ]

    def parse_card_section(self, raw_section: Sequence[Any]) -> CardSection:
        name = raw_section[1]
        payload = raw_section[2] if len(raw_section) > 2 else None
        return CardSection(name=name, payload=payload)
