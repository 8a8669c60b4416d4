"""Tests for RendererFactory and the module-level render shortcut."""

import json
from pathlib import Path

import pytest

from mobiledoc_markdown import RendererFactory, render
from mobiledoc_markdown.core.renderer import (
    handler_for_policy,
    render_atom_value,
    skip_unknown,
)
from mobiledoc_markdown.errors import (
    AtomNotFoundError,
    ConfigurationError,
    MobiledocJSONError,
    MobiledocRenderError,
    PluginValidationError,
    UnsupportedVersionError,
)
from mobiledoc_markdown.plugins import Atom, Card
from mobiledoc_markdown.renderers import (
    SUPPORTED_VERSIONS,
    MarkdownRenderer02,
    MarkdownRenderer03,
    get_renderer,
)
from tests.helpers import (
    ATOM_MARKER,
    CARD_SECTION,
    MARKUP_SECTION,
    mobiledoc_02,
    mobiledoc_03,
)


class TestGetRenderer:
    """Tests for version dispatch."""

    def test_supported_versions(self):
        assert SUPPORTED_VERSIONS == ("0.2.0", "0.3.0")

    def test_maps_versions(self):
        assert get_renderer("0.2.0") is MarkdownRenderer02
        assert get_renderer("0.3.0") is MarkdownRenderer03

    @pytest.mark.parametrize("version", ["0.1.0", "0.2.1", "1.0.0", 3])
    def test_unsupported_version(self, version):
        with pytest.raises(UnsupportedVersionError, match=str(version).replace(".", r"\.")):
            get_renderer(version)


class TestRendererFactory:
    """Tests for RendererFactory."""

    def test_renders_both_versions(self, paragraph_doc: dict):
        factory = RendererFactory()
        doc_02 = mobiledoc_02(sections=[[MARKUP_SECTION, "p", [[[], 0, "hello world"]]]])

        assert factory.render(paragraph_doc).result == "hello world\n"
        assert factory.render(doc_02).result == "hello world\n"

    def test_result_unpacks(self, paragraph_doc: dict):
        """Test that the result unpacks as (markdown, teardown)."""
        result, teardown = RendererFactory().render(paragraph_doc)

        assert result == "hello world\n"
        assert callable(teardown)

    def test_missing_version_defaults_to_0_2(self):
        """Test that documents without a version render as 0.2.0."""
        doc = {"sections": [[], [[MARKUP_SECTION, "p", [[[], 0, "legacy"]]]]]}

        assert RendererFactory().render(doc).result == "legacy\n"
        assert "version" not in doc

    def test_unexpected_version(self):
        with pytest.raises(UnsupportedVersionError, match="0.1.0"):
            RendererFactory().render(mobiledoc_03() | {"version": "0.1.0"})

    def test_rejects_non_object(self):
        with pytest.raises(MobiledocJSONError, match="got list"):
            RendererFactory().render([])

    def test_validates_plugins_eagerly(self):
        """Test that bad plugins fail at construction, not at render."""
        with pytest.raises(PluginValidationError):
            RendererFactory(cards=[Card(name="bad")])
        with pytest.raises(ConfigurationError):
            RendererFactory(atoms={"name": "bad"})

    def test_cards_shared_across_versions(self):
        card = Card(name="sig", render=lambda arg: "-- sig")
        factory = RendererFactory(cards=[card])

        assert factory.render(mobiledoc_02(sections=[[CARD_SECTION, "sig"]])).result == "-- sig"
        assert factory.render(
            mobiledoc_03(cards=[["sig"]], sections=[[CARD_SECTION, 0]])
        ).result == "-- sig"

    def test_teardown_scoped_to_render(self):
        """Test that each render's teardown only fires its own callbacks."""
        calls = []

        def render_card(arg):
            arg.env.on_teardown(lambda: calls.append(arg.payload["n"]))

        factory = RendererFactory(cards=[Card(name="c", render=render_card)])
        first = factory.render(mobiledoc_02(sections=[[CARD_SECTION, "c", {"n": 1}]]))
        second = factory.render(mobiledoc_02(sections=[[CARD_SECTION, "c", {"n": 2}]]))

        second.teardown()
        first.teardown()

        assert calls == [2, 1]

    def test_atoms_passed_to_0_3(self):
        atom = Atom(name="a", render=lambda arg: arg.value.upper())
        doc = mobiledoc_03(
            atoms=[["a", "loud"]],
            sections=[[MARKUP_SECTION, "p", [[ATOM_MARKER, [], 0, 0]]]],
        )

        assert RendererFactory(atoms=[atom]).render(doc).result == "LOUD\n"

    def test_errors_share_base_class(self):
        """Test that fatal errors can be caught together."""
        with pytest.raises(MobiledocRenderError):
            RendererFactory().render({"version": "9.9.9"})
        assert issubclass(MobiledocRenderError, ValueError)


class TestRenderJsonAndFile:
    """Tests for JSON text and file rendering."""

    def test_render_json(self, paragraph_doc: dict):
        assert RendererFactory().render_json(json.dumps(paragraph_doc)).result == "hello world\n"

    def test_render_invalid_json(self):
        with pytest.raises(MobiledocJSONError, match="Invalid Mobiledoc JSON"):
            RendererFactory().render_json("{not json")

    def test_render_file_writes_output(self, tmp_mobiledoc_file: Path, tmp_path: Path):
        output = tmp_path / "out" / "post.md"

        rendered = RendererFactory().render_file(tmp_mobiledoc_file, output)

        assert rendered.result == "## **Title**\nBody\n"
        assert output.read_text(encoding="utf-8") == rendered.result

    def test_render_file_without_output(self, tmp_mobiledoc_file: Path):
        """Test that no file is written when output_path is None."""
        rendered = RendererFactory().render_file(tmp_mobiledoc_file)

        assert rendered.result == "## **Title**\nBody\n"
        assert list(tmp_mobiledoc_file.parent.glob("*.md")) == []


class TestRenderShortcut:
    """Tests for the module-level render function."""

    def test_render(self, paragraph_doc: dict):
        assert render(paragraph_doc).result == "hello world\n"

    def test_render_with_options(self):
        doc = mobiledoc_02(sections=[[CARD_SECTION, "x"]])

        assert render(doc, unknown_card_handler=lambda arg: "fallback").result == "fallback"


class TestPolicies:
    """Tests for unknown card/atom policies."""

    def test_error_policy_keeps_default(self):
        assert handler_for_policy("error", "card") is None
        assert handler_for_policy("error", "atom") is None

    def test_skip_policy(self):
        assert handler_for_policy("skip", "card") is skip_unknown
        doc = mobiledoc_02(sections=[[CARD_SECTION, "missing"]])

        assert render(doc, unknown_card_handler=skip_unknown).result == ""

    def test_value_policy(self):
        assert handler_for_policy("value", "atom") is render_atom_value
        doc = mobiledoc_03(
            atoms=[["mention", "@bob"]],
            sections=[[MARKUP_SECTION, "p", [[ATOM_MARKER, [], 0, 0]]]],
        )

        assert render(doc, unknown_atom_handler=render_atom_value).result == "@bob\n"

    def test_value_policy_not_for_cards(self):
        with pytest.raises(ConfigurationError, match="Unknown card policy: value"):
            handler_for_policy("value", "card")

    def test_unknown_atom_still_raises_by_default(self):
        doc = mobiledoc_03(
            atoms=[["mention", "@bob"]],
            sections=[[MARKUP_SECTION, "p", [[ATOM_MARKER, [], 0, 0]]]],
        )

        with pytest.raises(AtomNotFoundError):
            render(doc)
