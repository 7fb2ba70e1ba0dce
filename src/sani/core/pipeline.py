"""Main rendering orchestrator."""

import codecs
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from sani.config import Settings, get_settings
from sani.formatting.ir import Document
from sani.formatting.parser import MarkdownParser
from sani.render import Renderer, StyleMap, get_renderer

logger = logging.getLogger(__name__)


class SaniError(Exception):
    """Base class for errors reported by sani."""

    pass


class InputEncodingError(SaniError):
    """Input is not valid UTF-8."""

    def __init__(self, message: str, position: Optional[int] = None) -> None:
        super().__init__(message)
        self.position = position


class RenderError(SaniError):
    """Input could not be read for rendering."""

    pass


def decode_source(data: bytes) -> str:
    """Decode a UTF-8 input buffer, dropping a leading byte order mark.

    Raises:
        InputEncodingError: If the buffer is not valid UTF-8
    """
    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8):]
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputEncodingError(
            f"Input is not valid UTF-8 (byte {e.start}: {e.reason})",
            position=e.start,
        ) from e


def wants_color(settings: Settings, stream: Optional[TextIO] = None) -> bool:
    """Decide whether to emit escape codes for the configured color mode."""
    if settings.color == "always":
        return True
    if settings.color == "never":
        return False
    stream = stream or sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class MarkdownRenderer:
    """Orchestrates the rendering pipeline.

    Pipeline:
    1. Decode the input buffer as UTF-8
    2. Tokenize and resolve inline markup into a Document
    3. Write the Document to a sink with the chosen renderer
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        renderer: Optional[Renderer] = None,
        color: Optional[bool] = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            settings: Configuration (defaults to the global settings)
            renderer: Renderer to use; built from settings when omitted
            color: Force ANSI (True) or plain (False) output; None follows
                the configured color mode at render time
        """
        self.settings = settings or get_settings()
        self.parser = MarkdownParser()
        self.style_map = StyleMap.from_settings(self.settings)
        self.renderer = renderer
        self.color = color

    def renderer_for(self, sink: TextIO) -> Renderer:
        """The renderer to use for a given sink."""
        if self.renderer is not None:
            return self.renderer
        color = self.color if self.color is not None else wants_color(self.settings, sink)
        renderer_class = get_renderer("ansi" if color else "plain")
        logger.debug("Using %s renderer", renderer_class.name)
        return renderer_class(
            style_map=self.style_map,
            preserve_wrapping=self.settings.preserve_wrapping,
        )

    def parse(self, text: str, metadata: Optional[dict] = None) -> Document:
        return self.parser.parse(text, metadata=metadata)

    def render_text(self, text: str, sink: TextIO) -> Document:
        """Parse and render Markdown text.

        Returns:
            The Document that was rendered
        """
        document = self.parse(text)
        self.renderer_for(sink).render(document, sink)
        return document

    def render_bytes(self, data: bytes, sink: TextIO) -> Document:
        """Decode, parse and render a raw input buffer.

        Raises:
            InputEncodingError: If the buffer is not valid UTF-8
        """
        return self.render_text(decode_source(data), sink)

    def render_file(self, path: Path, sink: TextIO) -> Document:
        """Read a file and render it.

        Raises:
            RenderError: If the file cannot be read
            InputEncodingError: If the file is not valid UTF-8
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            raise RenderError(f"unable to read file `{path}`: {e.strerror or e}") from e
        logger.debug("Read %d bytes from %s", len(data), path)
        return self.render_bytes(data, sink)
