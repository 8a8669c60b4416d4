"""Document builders shared by the renderer tests."""

from mobiledoc_markdown.formatting.sections import MarkerType, SectionType


MARKUP_SECTION = SectionType.MARKUP.value
IMAGE_SECTION = SectionType.IMAGE.value
LIST_SECTION = SectionType.LIST.value
CARD_SECTION = SectionType.CARD.value
MARKUP_MARKER = MarkerType.MARKUP.value
ATOM_MARKER = MarkerType.ATOM.value

DATA_URI = "data:image/gif;base64,R0lGODlhAQABAIAAAP///wAAACwAAAAAAQABAAACAkQBADs="


def mobiledoc_02(markups=None, sections=None) -> dict:
    """Build a 0.2.0 document."""
    return {
        "version": "0.2.0",
        "sections": [markups or [], sections or []],
    }


def mobiledoc_03(sections=None, markups=None, cards=None, atoms=None) -> dict:
    """Build a 0.3.0 document."""
    return {
        "version": "0.3.0",
        "atoms": atoms or [],
        "cards": cards or [],
        "markups": markups or [],
        "sections": sections or [],
    }
