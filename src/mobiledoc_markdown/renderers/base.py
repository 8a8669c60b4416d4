"""Schema-independent rendering shared by every Mobiledoc version.

A version renderer decodes its own wire format into the section and
marker variants of :mod:`mobiledoc_markdown.formatting.sections`; the
walk over those variants, tag filtering, plugin invocation and teardown
bookkeeping all live here.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, NamedTuple, Optional, Sequence

from mobiledoc_markdown.errors import (
    InvalidRenderResultError,
    MissingDefinitionError,
    UnsupportedVersionError,
)
from mobiledoc_markdown.formatting.sections import (
    AtomRun,
    CardSection,
    ImageSection,
    ListSection,
    MarkerRun,
    MarkupSection,
    MarkupType,
    Section,
    SectionType,
    section_type_of,
)
from mobiledoc_markdown.formatting.tags import (
    is_valid_marker_type,
    is_valid_section_tag_name,
    normalize_tag_name,
)
from mobiledoc_markdown.formatting.tree import (
    CONTAINER_TAG,
    Element,
    Node,
    create_document_fragment,
    create_element,
    create_element_from_marker_type,
    create_text_node,
)
from mobiledoc_markdown.plugins.base import (
    Card,
    CardArgument,
    CardEnv,
    TeardownCallback,
    default_unknown_atom_handler,
    default_unknown_card_handler,
    find_plugin,
    validate_plugins,
)
from mobiledoc_markdown.plugins.image import IMAGE_CARD

logger = logging.getLogger(__name__)


class RenderResult(NamedTuple):
    """Markdown output plus the hook that fires plugin teardown callbacks."""

    result: str
    teardown: Callable[[], None]


def lookup_definition(table: Sequence[Any], index: Any, kind: str) -> Any:
    """Return ``table[index]`` for a card or atom reference.

    Raises:
        MissingDefinitionError: If *index* is not a valid position in *table*
            or the entry there is empty
    """
    if (
        not isinstance(index, int)
        or isinstance(index, bool)
        or index < 0
        or index >= len(table)
        or not table[index]
    ):
        raise MissingDefinitionError(kind, index)
    return table[index]


def walk_markers(
    element: Element,
    markers: Sequence[MarkerRun],
    markup_types: Sequence[MarkupType],
    render_atom: Optional[Callable[[int], Node]] = None,
) -> list[Element]:
    """Rebuild the inline tree of *element* from flattened marker runs.

    Each run opens the markups listed in ``open_indices``, emits its
    content into the innermost open element, then closes ``close_count``
    elements. Markups whose tag is not allowlisted open nothing, so one
    close is dropped for each of them.

    Malformed input is tolerated: a negative close count closes nothing
    and *element* itself is never closed.

    Args:
        element: Section element that receives the rebuilt children
        markers: Decoded marker runs
        markup_types: Markup definitions referenced by ``open_indices``
        render_atom: Renders an atom index to a node; required when
            *markers* contains :class:`AtomRun` entries

    Returns:
        The stack of elements still open after the last run, outermost
        first. Balanced input leaves only *element*.
    """
    elements = [element]
    current = element

    for marker in markers:
        close_count = marker.close_count

        for index in marker.open_indices:
            markup_type = lookup_definition(markup_types, index, "markup")
            if is_valid_marker_type(markup_type.tag_name):
                opened = create_element_from_marker_type(
                    markup_type.tag_name, markup_type.attributes
                )
                current.append_child(opened)
                elements.append(opened)
                current = opened
            else:
                logger.debug("Dropping disallowed markup tag %r", markup_type.tag_name)
                close_count -= 1

        if isinstance(marker, AtomRun):
            if render_atom is None:
                raise TypeError("Atom marker found but atoms are not supported")
            current.append_child(render_atom(marker.atom_index))
        else:
            current.append_child(create_text_node(marker.text))

        if close_count < 0:
            logger.debug("Clamping negative close count %d to 0", close_count)
            close_count = 0

        for _ in range(close_count):
            if len(elements) == 1:
                logger.debug("Ignoring close past the section root")
                break
            elements.pop()
        current = elements[-1]

    return elements


class BaseRenderer(ABC):
    """Render one Mobiledoc document to Markdown.

    Subclasses set :attr:`version` and decode their schema; everything
    else is shared. An instance keeps every teardown callback registered
    by its plugins, across repeated :meth:`render` calls.
    """

    version: ClassVar[str]
    supports_atoms: ClassVar[bool] = False

    def __init__(
        self,
        mobiledoc: dict,
        cards: Optional[Sequence[Card]] = None,
        card_options: Any = None,
        atoms: Optional[Sequence[Any]] = None,
        unknown_card_handler: Optional[Callable[[Any], Optional[str]]] = None,
        unknown_atom_handler: Optional[Callable[[Any], Optional[str]]] = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            mobiledoc: Parsed Mobiledoc document
            cards: Card plugins, looked up by name
            card_options: Value passed unchanged to every card and atom
            atoms: Atom plugins, looked up by name (ignored before 0.3.0)
            unknown_card_handler: Render function for unmatched cards
            unknown_atom_handler: Render function for unmatched atoms

        Raises:
            UnsupportedVersionError: If the document version does not match
            ConfigurationError: If cards or atoms are not a list
            PluginValidationError: If a card or atom breaks the contract
        """
        self.validate_version(mobiledoc.get("version"))

        self.cards = validate_plugins(cards, "Card", "cards")
        self.atoms = (
            validate_plugins(atoms, "Atom", "atoms") if self.supports_atoms else []
        )
        self.card_options = {} if card_options is None else card_options
        self.unknown_card_handler = unknown_card_handler or default_unknown_card_handler
        self.unknown_atom_handler = unknown_atom_handler or default_unknown_atom_handler

        self.sections: list[Any] = []
        self.markup_types: list[MarkupType] = []
        self._teardown_callbacks: list[TeardownCallback] = []

        self.load(mobiledoc)

    @classmethod
    def validate_version(cls, version: Any) -> None:
        if version != cls.version:
            raise UnsupportedVersionError(version)

    # -- schema hooks -------------------------------------------------------

    @abstractmethod
    def load(self, mobiledoc: dict) -> None:
        """Populate :attr:`sections` and :attr:`markup_types`."""
        ...

    @abstractmethod
    def parse_markers(self, raw_markers: Sequence[Any]) -> list[MarkerRun]:
        """Decode one section's (or list item's) marker runs."""
        ...

    @abstractmethod
    def parse_card_section(self, raw_section: Sequence[Any]) -> CardSection:
        """Decode a card section into its card name and payload."""
        ...

    # -- public API ---------------------------------------------------------

    def render(self) -> RenderResult:
        """Render every section and return the Markdown text."""
        logger.debug(
            "Rendering Mobiledoc %s with %d section(s)", self.version, len(self.sections)
        )
        root = create_document_fragment()
        for raw_section in self.sections:
            rendered = self.render_section(raw_section)
            if rendered is not None:
                root.append_child(rendered)

        return RenderResult(result=root.to_markdown(), teardown=self.teardown)

    def teardown(self) -> None:
        """Fire every registered teardown callback in registration order.

        There is no guard against repeated calls; each call fires every
        callback again.
        """
        for callback in list(self._teardown_callbacks):
            callback()

    # -- sections -----------------------------------------------------------

    def parse_section(self, raw_section: Sequence[Any], section_type: SectionType) -> Section:
        """Decode a raw section array of a known kind into its typed variant."""
        if section_type == SectionType.MARKUP:
            markers = raw_section[2] if len(raw_section) > 2 else []
            return MarkupSection(
                tag_name=raw_section[1],
                markers=self.parse_markers(markers or []),
            )
        if section_type == SectionType.IMAGE:
            return ImageSection(url=raw_section[1])
        if section_type == SectionType.LIST:
            items = raw_section[2] if len(raw_section) > 2 else []
            return ListSection(
                tag_name=raw_section[1],
                items=[self.parse_markers(item) for item in items or []],
            )
        return self.parse_card_section(raw_section)

    def render_section(self, raw_section: Sequence[Any]) -> Optional[Element]:
        section_type = section_type_of(raw_section)

        # Disallowed sections are dropped before their markers are decoded
        if section_type in (SectionType.MARKUP, SectionType.LIST):
            tag_name = raw_section[1] if len(raw_section) > 1 else None
            if not is_valid_section_tag_name(tag_name, section_type):
                logger.debug(
                    "Dropping %s section with tag %r", section_type.name.lower(), tag_name
                )
                return None

        section = self.parse_section(raw_section, section_type)

        if isinstance(section, MarkupSection):
            return self.render_markup_section(section)
        if isinstance(section, ImageSection):
            return self.render_image_section(section)
        if isinstance(section, ListSection):
            return self.render_list_section(section)
        return self.render_card_section(section)

    def render_markup_section(self, section: MarkupSection) -> Element:
        element = create_element(section.tag_name)
        self._render_markers_on_element(element, section.markers)
        return element

    def render_image_section(self, section: ImageSection) -> Element:
        element = create_element("img")
        element.set_attribute("src", section.url)
        return element

    def render_list_section(self, section: ListSection) -> Element:
        element = create_element(section.tag_name)
        ordered = normalize_tag_name(section.tag_name) == "ol"
        for position, item in enumerate(section.items, start=1):
            element.append_child(
                self.render_list_item(item, position if ordered else None)
            )
        return element

    def render_list_item(
        self,
        markers: Sequence[MarkerRun],
        position: Optional[int] = None,
    ) -> Element:
        element = create_element("li")
        if position is not None:
            element.set_attribute("position", position)
        self._render_markers_on_element(element, markers)
        return element

    # -- cards --------------------------------------------------------------

    def find_card(self, name: str) -> Any:
        """Resolve a card by name, falling back to the image card, then the
        unknown-card handler."""
        card = find_plugin(self.cards, name)
        if card is not None:
            return card
        if name == IMAGE_CARD.name:
            return IMAGE_CARD
        logger.debug("Card %r not registered, using unknown card handler", name)
        return Card(name=name, render=self.unknown_card_handler)

    def render_card_section(self, section: CardSection) -> Element:
        card = self.find_card(section.name)

        wrapper = create_element(CONTAINER_TAG)
        arg = self._create_card_argument(card, section.payload)
        rendered = card.render(arg)
        self._validate_render_result(rendered, "Card", card.name)

        if rendered:
            wrapper.append_child(create_text_node(rendered))
        return wrapper

    def _create_card_argument(self, card: Any, payload: Any = None) -> CardArgument:
        env = CardEnv(
            name=card.name,
            on_teardown=self._register_teardown_callback,
            is_in_editor=False,
        )
        return CardArgument(
            env=env,
            options=self.card_options,
            payload={} if payload is None else payload,
        )

    # -- helpers ------------------------------------------------------------

    def _register_teardown_callback(self, callback: TeardownCallback) -> None:
        self._teardown_callbacks.append(callback)

    def _validate_render_result(self, rendered: Any, kind: str, name: str) -> None:
        if rendered is None or isinstance(rendered, str):
            return
        raise InvalidRenderResultError(kind, name, rendered)

    def _render_markers_on_element(
        self,
        element: Element,
        markers: Sequence[MarkerRun],
    ) -> None:
        render_atom = getattr(self, "render_atom", None)
        walk_markers(element, markers, self.markup_types, render_atom)
