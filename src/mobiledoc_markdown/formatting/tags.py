"""Tag-name allowlists.

Only tags listed here are ever turned into Markdown tree elements.
Anything else is treated as untrusted input and dropped, which keeps
injected tags such as ``script`` out of the output.
"""

from typing import Optional

from mobiledoc_markdown.formatting.sections import SectionType


MARKUP_SECTION_TAG_NAMES = frozenset({
    "p",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "blockquote",
    "pull-quote",
    "aside",
})

LIST_SECTION_TAG_NAMES = frozenset({"ul", "ol"})

MARKUP_TYPES = frozenset({
    "b",
    "i",
    "strong",
    "em",
    "a",
    "u",
    "sub",
    "sup",
    "s",
    "code",
})

SECTION_TAG_NAMES: dict[SectionType, frozenset[str]] = {
    SectionType.MARKUP: MARKUP_SECTION_TAG_NAMES,
    SectionType.LIST: LIST_SECTION_TAG_NAMES,
}


def normalize_tag_name(tag_name: Optional[str]) -> str:
    """Lowercase a tag name; non-strings normalize to an empty string."""
    if not isinstance(tag_name, str):
        return ""
    return tag_name.lower()


def is_valid_section_tag_name(tag_name: Optional[str], section_type: SectionType) -> bool:
    """Check a section tag against the allowlist for its section kind.

    Section kinds without tag names (images, cards) have no allowlist and
    always fail the check.
    """
    allowed = SECTION_TAG_NAMES.get(section_type)
    if allowed is None:
        return False
    return normalize_tag_name(tag_name) in allowed


def is_valid_marker_type(tag_name: Optional[str]) -> bool:
    """Check an inline marker tag against the markup allowlist."""
    return normalize_tag_name(tag_name) in MARKUP_TYPES
