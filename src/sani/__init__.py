"""sani - render Markdown to the terminal."""

__version__ = "0.1.0"

from sani.formatting import Document, MarkdownParser, parse
from sani.render import AnsiRenderer, PlainRenderer, StyleMap, iter_segments
from sani.core import InputEncodingError, MarkdownRenderer, SaniError


def render(document: Document, color: bool = True) -> str:
    """Render a parsed document to a string, with or without escape codes."""
    renderer = AnsiRenderer() if color else PlainRenderer()
    return renderer.render_to_string(document)


__all__ = [
    "__version__",
    "Document",
    "MarkdownParser",
    "parse",
    "render",
    "AnsiRenderer",
    "PlainRenderer",
    "StyleMap",
    "iter_segments",
    "InputEncodingError",
    "MarkdownRenderer",
    "SaniError",
]
