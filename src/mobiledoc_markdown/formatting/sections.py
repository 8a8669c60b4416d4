"""Typed view of Mobiledoc sections and marker runs.

The wire format encodes sections and inline runs as positional arrays.
Each version renderer decodes those arrays into the variants defined
here so the shared rendering code never indexes into raw lists.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Optional, Union

from mobiledoc_markdown.errors import UnknownSectionTypeError


class SectionType(IntEnum):
    """Discriminant stored in the first slot of every section array."""

    MARKUP = 1
    IMAGE = 2
    LIST = 3
    CARD = 10


class MarkerType(IntEnum):
    """Discriminant stored in the first slot of a 0.3.0 marker run."""

    MARKUP = 0
    ATOM = 1


@dataclass
class MarkupType:
    """An inline tag definition referenced by index from marker runs.

    Attributes:
        tag_name: Tag as written in the document (``B``, ``a``, ...)
        attributes: Flat alternating key/value list
    """

    tag_name: str = ""
    attributes: list[Any] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Any) -> "MarkupType":
        if not raw:
            return cls()
        tag_name = raw[0]
        attributes = raw[1] if len(raw) > 1 and raw[1] else []
        return cls(tag_name=tag_name, attributes=list(attributes))


# =============================================================================
# Marker runs
# =============================================================================

@dataclass
class TextRun:
    """Inline text preceded by opened markups and followed by closes."""

    open_indices: list[int]
    close_count: int
    text: str


@dataclass
class AtomRun:
    """Inline atom reference (0.3.0 only)."""

    open_indices: list[int]
    close_count: int
    atom_index: int


MarkerRun = Union[TextRun, AtomRun]


# =============================================================================
# Sections
# =============================================================================

@dataclass
class MarkupSection:
    tag_name: str
    markers: list[MarkerRun] = field(default_factory=list)


@dataclass
class ImageSection:
    url: str


@dataclass
class ListSection:
    """A ``ul``/``ol`` section; each item is its own marker-run sequence."""

    tag_name: str
    items: list[list[MarkerRun]] = field(default_factory=list)


@dataclass
class CardSection:
    """A card section with its definition already resolved to a name."""

    name: str
    payload: Optional[Any] = None


Section = Union[MarkupSection, ImageSection, ListSection, CardSection]


def section_type_of(raw_section: Any) -> SectionType:
    """Return the discriminant of a raw section array.

    Raises:
        UnknownSectionTypeError: If the discriminant is not a known kind
    """
    raw_type = raw_section[0] if raw_section else None
    # JSON true would otherwise compare equal to 1
    if isinstance(raw_type, bool):
        raise UnknownSectionTypeError(raw_type)
    try:
        return SectionType(raw_type)
    except (ValueError, TypeError):
        raise UnknownSectionTypeError(raw_type) from None
