"""Renderer emitting text without any styling."""

from typing import TextIO

from sani.render.base import Renderer
from sani.render.segments import StyledSegment


class PlainRenderer(Renderer):
    """Render text only, for pipes and terminals without styling."""

    name = "plain"

    def write_segment(self, segment: StyledSegment, sink: TextIO) -> None:
        sink.write(segment.text)
