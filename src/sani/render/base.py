"""Abstract base class for output renderers."""

import io
from abc import ABC, abstractmethod
from typing import Iterator, Optional, TextIO

from sani.formatting.ir import Document
from sani.render.segments import StyledSegment, iter_segments
from sani.render.styles import StyleMap


class Renderer(ABC):
    """Abstract base class for output renderers.

    A renderer writes a parsed Document to a caller-supplied text sink.
    It never opens or closes the sink itself.
    """

    name: str = ""

    def __init__(
        self,
        style_map: Optional[StyleMap] = None,
        preserve_wrapping: bool = False,
    ) -> None:
        """Initialize the renderer.

        Args:
            style_map: Attributes to use per span kind
            preserve_wrapping: Render soft breaks as newlines instead of spaces
        """
        self.style_map = style_map or StyleMap()
        self.preserve_wrapping = preserve_wrapping

    def segments(self, document: Document) -> Iterator[StyledSegment]:
        """Styled segments for a document using this renderer's options."""
        return iter_segments(document, self.style_map, self.preserve_wrapping)

    @abstractmethod
    def write_segment(self, segment: StyledSegment, sink: TextIO) -> None:
        """Write one styled segment to the sink."""
        ...

    def finish(self, sink: TextIO) -> None:
        """Write whatever is needed after the last segment.

        Default implementation writes nothing.
        """

    def render(self, document: Document, sink: TextIO) -> None:
        """Write a document to the sink.

        Args:
            document: The parsed document
            sink: Any object with a text `write` method
        """
        if document.is_empty:
            return
        for segment in self.segments(document):
            self.write_segment(segment, sink)
        self.finish(sink)
        sink.write("\n")

    def render_to_string(self, document: Document) -> str:
        """Render a document into a string."""
        buffer = io.StringIO()
        self.render(document, buffer)
        return buffer.getvalue()
