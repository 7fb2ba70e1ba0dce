"""Pytest fixtures for sani tests."""

import pytest
from pathlib import Path

from sani.config import reset_settings
from sani.formatting.parser import MarkdownParser
from sani.render import AnsiRenderer, PlainRenderer


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Isolate every test from SANI_* variables, .env files and cached settings."""
    for name in (
        "SANI_COLOR",
        "SANI_PRESERVE_WRAPPING",
        "SANI_EMPHASIS_STYLE",
        "SANI_STRONG_STYLE",
        "SANI_STRIKETHROUGH_STYLE",
        "SANI_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def parser() -> MarkdownParser:
    """Create a parser instance."""
    return MarkdownParser()


@pytest.fixture
def ansi() -> AnsiRenderer:
    """ANSI renderer with the default style map."""
    return AnsiRenderer()


@pytest.fixture
def plain() -> PlainRenderer:
    """Renderer without escape codes."""
    return PlainRenderer()


@pytest.fixture
def sample_markdown() -> str:
    """A small document touching every supported construct."""
    return (
        "Lorem *ipsum* dolor **sit** amet,\n"
        "consectetur ~~adipiscing~~ elit.  \n"
        "Sed do *eiusmod **tempor** incididunt*.\n"
        "\n"
        "Ut labore et \\*dolore\\* magna."
    )


@pytest.fixture
def tmp_markdown_file(tmp_path: Path, sample_markdown: str) -> Path:
    """Create a temporary Markdown file for testing."""
    file_path = tmp_path / "sample.md"
    file_path.write_text(sample_markdown, encoding="utf-8")
    return file_path
