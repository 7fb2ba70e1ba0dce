"""Intermediate Representation for resolved inline Markdown.

This module defines the data structures that bridge the delimiter
resolver and the terminal renderers. A Document is an ordered sequence
of paragraphs, each holding a tree of inline nodes.
"""

from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Iterator, Union


class TextStyle(Flag):
    """Terminal text attributes (combinable with |)."""

    NONE = 0
    BOLD = auto()
    DIM = auto()
    ITALIC = auto()
    UNDERLINE = auto()
    STRIKETHROUGH = auto()


@dataclass(frozen=True)
class Text:
    """A run of literal text.

    Attributes:
        content: The text, with escapes already applied
    """

    content: str

    def __str__(self) -> str:
        return self.content


@dataclass(frozen=True)
class SoftBreak:
    """A single newline inside a paragraph."""

    def __str__(self) -> str:
        return " "


@dataclass(frozen=True)
class HardBreak:
    """A forced line break inside a paragraph."""

    def __str__(self) -> str:
        return "\n"


@dataclass(frozen=True)
class ParagraphBoundary:
    """The gap between two paragraphs."""

    def __str__(self) -> str:
        return "\n\n"


@dataclass(frozen=True)
class Span:
    """Base class for nodes wrapping a matched delimiter pair.

    Attributes:
        children: Nested inline nodes, never empty
    """

    children: tuple["InlineNode", ...]

    @property
    def plain_text(self) -> str:
        """Get the text content of this span without styling."""
        return _plain(self)

    def __str__(self) -> str:
        return self.plain_text


@dataclass(frozen=True)
class Emphasis(Span):
    """Emphasised text (`*a*` or `_a_`)."""


@dataclass(frozen=True)
class Strong(Span):
    """Strongly emphasised text (`**a**` or `__a__`)."""


@dataclass(frozen=True)
class Strikethrough(Span):
    """Struck-through text (`~~a~~`)."""


InlineNode = Union[Text, Emphasis, Strong, Strikethrough, SoftBreak, HardBreak, ParagraphBoundary]


def _plain(node: "InlineNode") -> str:
    """Plain text of a node, walked without recursion."""
    parts: list[str] = []
    pending: list = [node]
    while pending:
        current = pending.pop()
        if isinstance(current, Span):
            pending.extend(reversed(current.children))
        else:
            parts.append(str(current))
    return "".join(parts)


@dataclass(frozen=True)
class Paragraph:
    """A paragraph of inline nodes.

    Attributes:
        nodes: Top-level inline nodes in source order
    """

    nodes: tuple[InlineNode, ...] = ()

    @property
    def plain_text(self) -> str:
        """Get the plain text content without styling."""
        return "".join(_plain(node) for node in self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __str__(self) -> str:
        return self.plain_text


@dataclass(frozen=True)
class Document:
    """Complete parsed document ready for rendering.

    Attributes:
        paragraphs: Paragraphs in source order
        metadata: Additional information about the source
    """

    paragraphs: tuple[Paragraph, ...] = ()
    metadata: dict = field(default_factory=dict, compare=False)

    @property
    def plain_text(self) -> str:
        """Get all text content without styling."""
        return "\n\n".join(paragraph.plain_text for paragraph in self.paragraphs)

    @property
    def is_empty(self) -> bool:
        return not self.paragraphs

    def nodes(self) -> Iterator[InlineNode]:
        """Yield every top-level node, with a boundary between paragraphs."""
        for index, paragraph in enumerate(self.paragraphs):
            if index:
                yield ParagraphBoundary()
            yield from paragraph.nodes
