"""Pytest fixtures for BB Encoder tests."""

import pytest
from pathlib import Path

from bbencoder import config
from bbencoder.formatting.ir import StyledDocument, StyleSet, TextStyle


ENV_VARS = (
    "BBENCODER_CODE_TAGS",
    "BBENCODER_REPLACE_TABS",
    "BBENCODER_STRIKE_FULL_WORD",
    "BBENCODER_TAB_WIDTH",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    """Isolate tests from the caller's environment and cached settings."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "_settings", None)
    yield


@pytest.fixture
def overlapping_document() -> StyledDocument:
    """Plain "A", bold+italic "B", bold "C"."""
    doc = StyledDocument()
    doc.append("A")
    doc.append("B", StyleSet(style=TextStyle.BOLD | TextStyle.ITALIC))
    doc.append("C", StyleSet(style=TextStyle.BOLD))
    return doc


@pytest.fixture
def sample_markdown() -> str:
    """Sample markdown input."""
    return "Some **bold** and *italic* text with a [link](https://example.com)."


@pytest.fixture
def tmp_markdown_file(tmp_path: Path, sample_markdown: str) -> Path:
    """Create a temporary markdown file for testing."""
    file_path = tmp_path / "sample.md"
    file_path.write_text(sample_markdown, encoding="utf-8")
    return file_path


@pytest.fixture
def tmp_text_file(tmp_path: Path) -> Path:
    """Create a temporary text file for testing."""
    file_path = tmp_path / "test.txt"
    file_path.write_text("Hello\tworld", encoding="utf-8")
    return file_path
