"""Markdown tree, tag allowlists and typed Mobiledoc sections."""

from mobiledoc_markdown.formatting.sections import (
    AtomRun,
    CardSection,
    ImageSection,
    ListSection,
    MarkerRun,
    MarkerType,
    MarkupSection,
    MarkupType,
    Section,
    SectionType,
    TextRun,
)
from mobiledoc_markdown.formatting.tags import (
    LIST_SECTION_TAG_NAMES,
    MARKUP_SECTION_TAG_NAMES,
    MARKUP_TYPES,
    is_valid_marker_type,
    is_valid_section_tag_name,
)
from mobiledoc_markdown.formatting.tree import Element, Node, TextNode

__all__ = [
    "AtomRun",
    "CardSection",
    "ImageSection",
    "ListSection",
    "MarkerRun",
    "MarkerType",
    "MarkupSection",
    "MarkupType",
    "Section",
    "SectionType",
    "TextRun",
    "LIST_SECTION_TAG_NAMES",
    "MARKUP_SECTION_TAG_NAMES",
    "MARKUP_TYPES",
    "is_valid_marker_type",
    "is_valid_section_tag_name",
    "Element",
    "Node",
    "TextNode",
]
