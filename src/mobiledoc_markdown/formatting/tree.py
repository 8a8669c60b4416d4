"""Intermediate Markdown tree built while walking a Mobiledoc.

Renderers assemble :class:`Element` and :class:`TextNode` objects the
same way a DOM renderer would build HTML nodes, then call
:meth:`Element.to_markdown` once to serialize the whole tree. This module
is the only place that knows Markdown syntax.
"""

from dataclasses import dataclass, field
from typing import Optional, Union


# Tags whose opening and closing markers are identical
_WRAPPING_TAGS: dict[str, str] = {
    "b": "**",
    "strong": "**",
    "i": "*",
    "em": "*",
}

_HEADING_TAGS: dict[str, int] = {
    "h1": 1,
    "h2": 2,
    "h3": 3,
    "h4": 4,
}

# Block tags terminated by a newline
_BLOCK_TAGS = frozenset({"p", "h1", "h2", "h3", "h4", "blockquote", "li"})

# Link-like tags and the attribute holding their target
_LINK_TAGS: dict[str, tuple[str, str]] = {
    "a": ("[", "href"),
    "img": ("![", "src"),
}

CONTAINER_TAG = "div"


@dataclass
class TextNode:
    """A literal run of text. The value is emitted without escaping."""

    value: str

    def to_markdown(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@dataclass
class Element:
    """An element in the Markdown tree.

    Attributes:
        tag_name: Lowercased tag name (``p``, ``b``, ``li``, ...)
        attributes: Flat ``[name, value, name, value, ...]`` list
        children: Child elements and text nodes in document order
    """

    tag_name: str
    attributes: list[object] = field(default_factory=list)
    children: list["Node"] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tag_name = self.tag_name.lower()

    def append_child(self, child: "Node") -> None:
        """Append a child node."""
        self.children.append(child)

    def set_attribute(self, name: str, value: object) -> None:
        """Record an attribute. Repeated names are appended, not replaced."""
        self.attributes.extend((name, value))

    def get_attribute(self, name: str) -> Optional[object]:
        """Return the most recently set value for *name*, or None."""
        value = None
        for i in range(0, len(self.attributes) - 1, 2):
            if self.attributes[i] == name:
                value = self.attributes[i + 1]
        return value

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes[0::2]

    def _opening(self) -> str:
        tag = self.tag_name
        if tag in _WRAPPING_TAGS:
            return _WRAPPING_TAGS[tag]
        if tag in _HEADING_TAGS:
            return "#" * _HEADING_TAGS[tag] + " "
        if tag in _LINK_TAGS:
            return _LINK_TAGS[tag][0]
        if tag == "li":
            if self.has_attribute("position"):
                return f"{self.get_attribute('position')}. "
            return "* "
        if tag == "blockquote":
            return "> "
        return ""

    def _closing(self) -> str:
        tag = self.tag_name
        if tag in _WRAPPING_TAGS:
            return _WRAPPING_TAGS[tag]
        if tag in _LINK_TAGS:
            target_attr = _LINK_TAGS[tag][1]
            if self.has_attribute(target_attr):
                return f"]({self.get_attribute(target_attr)})"
            return "]"
        if tag in _BLOCK_TAGS:
            return "\n"
        return ""

    def to_markdown(self) -> str:
        """Serialize this element and its subtree to Markdown."""
        parts = [self._opening()]
        parts.extend(child.to_markdown() for child in self.children)
        parts.append(self._closing())
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_markdown()


Node = Union[Element, TextNode]


def create_element(tag_name: str) -> Element:
    return Element(tag_name=tag_name)


def create_text_node(text: str) -> TextNode:
    return TextNode(value=text)


def create_document_fragment() -> Element:
    """Create the root container that collects rendered sections."""
    return Element(tag_name=CONTAINER_TAG)


def create_element_from_marker_type(
    tag_name: str,
    attributes: Optional[list[object]] = None,
) -> Element:
    """Build an element from a ``[tagName, [k, v, k, v]]`` marker type."""
    element = create_element(tag_name)
    attributes = attributes or []
    for i in range(0, len(attributes) - 1, 2):
        element.set_attribute(attributes[i], attributes[i + 1])
    return element
