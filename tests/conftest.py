"""Pytest fixtures for mobiledoc-markdown tests."""

import pytest
from pathlib import Path

import mobiledoc_markdown.config as config
from tests.helpers import MARKUP_MARKER, MARKUP_SECTION, mobiledoc_03


@pytest.fixture(autouse=True)
def reset_settings():
    """Drop the cached settings so environment changes take effect."""
    config._settings = None
    yield
    config._settings = None


@pytest.fixture
def paragraph_doc() -> dict:
    """A 0.3.0 document with a single plain paragraph."""
    return mobiledoc_03(
        sections=[
            [MARKUP_SECTION, "p", [[MARKUP_MARKER, [], 0, "hello world"]]],
        ]
    )


@pytest.fixture
def tmp_mobiledoc_file(tmp_path: Path) -> Path:
    """Write a small 0.2.0 document to disk."""
    file_path = tmp_path / "post.json"
    file_path.write_text(
        '{"version": "0.2.0", "sections": [[["b"]], '
        '[[1, "h2", [[[0], 1, "Title"]]], [1, "p", [[[], 0, "Body"]]]]]}',
        encoding="utf-8",
    )
    return file_path
