"""Walk a Document into (text, style) segments.

This is the structured output for hosts that do their own styling; the
ANSI renderer is built on top of it.
"""

from typing import Iterator, NamedTuple, Optional

from sani.formatting.ir import (
    Document,
    HardBreak,
    InlineNode,
    ParagraphBoundary,
    SoftBreak,
    Span,
    Text,
    TextStyle,
)
from sani.render.styles import StyleMap

# C0 controls other than tab and newline, plus DEL, become their visible
# control pictures; C1 controls become U+FFFD. Raw ESC in the source must
# never reach the terminal as an escape sequence.
CONTROL_CHAR_MAP = {
    code: 0x2400 + code for code in range(0x20) if chr(code) not in "\t\n"
}
CONTROL_CHAR_MAP[0x7F] = 0x2421
CONTROL_CHAR_MAP.update({code: 0xFFFD for code in range(0x80, 0xA0)})


def neutralise_controls(text: str) -> str:
    """Replace control characters that a terminal would interpret."""
    return text.translate(CONTROL_CHAR_MAP)


class StyledSegment(NamedTuple):
    """A piece of output text and the attributes active for it."""

    text: str
    style: TextStyle


class StyleScope:
    """Stack of active attribute sets.

    Each entry is the full set in effect at that depth, so popping
    restores the enclosing style exactly instead of undoing attributes
    one by one.
    """

    def __init__(self) -> None:
        self._stack: list[TextStyle] = []

    @property
    def current(self) -> TextStyle:
        return self._stack[-1] if self._stack else TextStyle.NONE

    def push(self, style: TextStyle) -> TextStyle:
        """Open a nested scope adding `style`; returns the new current style."""
        self._stack.append(self.current | style)
        return self.current

    def pop(self) -> TextStyle:
        """Close the innermost scope; returns the restored style."""
        if self._stack:
            self._stack.pop()
        return self.current

    def reset(self) -> None:
        self._stack.clear()

    def __len__(self) -> int:
        return len(self._stack)


def iter_segments(
    document: Document,
    style_map: Optional[StyleMap] = None,
    preserve_wrapping: bool = False,
) -> Iterator[StyledSegment]:
    """Yield styled segments for a document, depth-first.

    Args:
        document: The parsed document
        style_map: Attributes to use per span kind
        preserve_wrapping: Render soft breaks as newlines instead of spaces

    Yields:
        StyledSegment for every text node and break
    """
    style_map = style_map or StyleMap()
    soft_break = "\n" if preserve_wrapping else " "
    scope = StyleScope()

    # explicit stack of (children iterator, opened a scope) so deeply
    # nested input does not hit the recursion limit
    pending: list[tuple[Iterator[InlineNode], bool]] = [(document.nodes(), False)]
    while pending:
        children, scoped = pending[-1]
        node = next(children, None)
        if node is None:
            pending.pop()
            if scoped:
                scope.pop()
            continue

        if isinstance(node, Span):
            scope.push(style_map.style_for(node))
            pending.append((iter(node.children), True))
        elif isinstance(node, Text):
            yield StyledSegment(neutralise_controls(node.content), scope.current)
        elif isinstance(node, SoftBreak):
            yield StyledSegment(soft_break, scope.current)
        elif isinstance(node, HardBreak):
            yield StyledSegment("\n", scope.current)
        elif isinstance(node, ParagraphBoundary):
            # paragraphs never carry styles across
            scope.reset()
            yield StyledSegment("\n\n", TextStyle.NONE)
