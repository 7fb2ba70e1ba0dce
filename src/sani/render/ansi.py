"""Renderer emitting ANSI SGR escape sequences."""

from typing import Optional, TextIO

from sani.formatting.ir import Document, TextStyle
from sani.render.base import Renderer
from sani.render.segments import StyledSegment
from sani.render.styles import StyleMap, codes_for_change


class AnsiRenderer(Renderer):
    """Render styled text for a terminal.

    Escape codes are only written when the style changes between
    segments, and every attribute is switched off before a paragraph
    boundary and at the end of the output.
    """

    name = "ansi"

    def __init__(
        self,
        style_map: Optional[StyleMap] = None,
        preserve_wrapping: bool = False,
    ) -> None:
        super().__init__(style_map=style_map, preserve_wrapping=preserve_wrapping)
        self._previous = TextStyle.NONE

    def render(self, document: Document, sink: TextIO) -> None:
        self._previous = TextStyle.NONE
        super().render(document, sink)

    def write_segment(self, segment: StyledSegment, sink: TextIO) -> None:
        codes = codes_for_change(segment.style, self._previous)
        if codes:
            sink.write(codes)
        sink.write(segment.text)
        self._previous = segment.style

    def finish(self, sink: TextIO) -> None:
        codes = codes_for_change(TextStyle.NONE, self._previous)
        if codes:
            sink.write(codes)
        self._previous = TextStyle.NONE
