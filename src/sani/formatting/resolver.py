"""Delimiter resolver: match delimiter runs into emphasis spans.

Uses the delimiter-stack algorithm from CommonMark in two linear passes:

1. Tokens are appended to a flat list. Delimiter runs become slots
   that remember which spans they open and close; an explicit stack of
   open slots is searched innermost-first whenever a run can close.
2. The flat list is folded into a tree by treating the recorded
   open/close markers as brackets.

Nothing here raises on malformed markup; unmatched delimiters come out
as literal text.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from sani.formatting.ir import (
    Emphasis,
    HardBreak,
    InlineNode,
    ParagraphBoundary,
    SoftBreak,
    Span,
    Strikethrough,
    Strong,
    Text,
)
from sani.formatting.tokens import (
    DelimiterRun,
    LineBreakHard,
    LineBreakSoft,
    ParagraphBreak,
    TextRun,
    Token,
)

logger = logging.getLogger(__name__)


@dataclass
class _Marker:
    """One side of a matched pair, recorded on a slot."""

    span: type[Span]
    literal: str


@dataclass
class _Slot:
    """Match state for one delimiter run in the flat output list."""

    char: str
    length: int
    remaining: int
    can_open: bool
    can_close: bool
    closes: list[_Marker] = field(default_factory=list)
    opens: list[_Marker] = field(default_factory=list)

    @classmethod
    def from_token(cls, token: DelimiterRun) -> "_Slot":
        return cls(
            char=token.char,
            length=token.length,
            remaining=token.length,
            can_open=token.can_open,
            can_close=token.can_close,
        )


@dataclass
class _Frame:
    """An open span while folding the flat list into a tree."""

    span: Optional[type[Span]]
    literal: str = ""
    children: list[InlineNode] = field(default_factory=list)


def _append_text(children: list[InlineNode], content: str) -> None:
    """Append text, merging with a preceding Text node."""
    if not content:
        return
    if children and isinstance(children[-1], Text):
        children[-1] = Text(children[-1].content + content)
    else:
        children.append(Text(content))


class DelimiterResolver:
    """Resolve a paragraph's tokens into inline nodes."""

    def resolve(self, tokens: Iterable[Token]) -> tuple[InlineNode, ...]:
        """Resolve tokens into a tuple of top-level inline nodes.

        Args:
            tokens: Tokens for one paragraph. A ParagraphBreak, if present,
                ends all open candidates and yields a ParagraphBoundary.

        Returns:
            Inline nodes in source order
        """
        items: list = []
        stack: list[_Slot] = []
        bottoms: dict[tuple, int] = {}

        for token in tokens:
            if isinstance(token, TextRun):
                items.append(Text(token.content))
            elif isinstance(token, DelimiterRun):
                slot = _Slot.from_token(token)
                items.append(slot)
                self._process(slot, stack, bottoms)
            elif isinstance(token, LineBreakSoft):
                items.append(SoftBreak())
            elif isinstance(token, LineBreakHard):
                items.append(HardBreak())
            elif isinstance(token, ParagraphBreak):
                stack.clear()
                bottoms.clear()
                items.append(ParagraphBoundary())

        if stack:
            logger.debug("%d unmatched delimiter run(s) left as text", len(stack))
        return self._build(items)

    def _process(self, closer: _Slot, stack: list[_Slot], bottoms: dict[tuple, int]) -> None:
        """Close as much of `closer` as possible, then push any remainder."""
        if closer.can_close:
            key = self._bottom_key(closer)
            while closer.remaining:
                index = self._find_opener(closer, stack, bottoms.get(key, 0))
                if index is None:
                    bottoms[key] = len(stack)
                    break
                opener = stack[index]
                span, used = self._span_for(opener, closer)
                literal = closer.char * used
                opener.remaining -= used
                closer.remaining -= used
                # inner matches come first, so later opens wrap earlier ones
                opener.opens.insert(0, _Marker(span, literal))
                closer.closes.append(_Marker(span, literal))

                # candidates between the pair can no longer match
                del stack[index + 1:]
                if not opener.remaining:
                    stack.pop()
                for other, bottom in bottoms.items():
                    bottoms[other] = min(bottom, len(stack))

        if closer.remaining and closer.can_open:
            stack.append(closer)

    @staticmethod
    def _bottom_key(closer: _Slot) -> tuple:
        if closer.char == "~":
            return (closer.char, closer.length)
        return (closer.char, closer.can_open, closer.length % 3)

    @staticmethod
    def _find_opener(closer: _Slot, stack: list[_Slot], bottom: int) -> Optional[int]:
        """Index of the nearest compatible opener above `bottom`, if any."""
        for index in range(len(stack) - 1, bottom - 1, -1):
            opener = stack[index]
            if opener.char != closer.char:
                continue
            if closer.char == "~":
                if opener.remaining == closer.remaining:
                    return index
                continue
            # rule of three: a run that can both open and close only pairs
            # up when the combined length is not a multiple of three
            if (opener.can_close or closer.can_open) and (
                (opener.length + closer.length) % 3 == 0
                and not (opener.length % 3 == 0 and closer.length % 3 == 0)
            ):
                continue
            return index
        return None

    @staticmethod
    def _span_for(opener: _Slot, closer: _Slot) -> tuple[type[Span], int]:
        """Span type and number of delimiter characters used by one match."""
        if closer.char == "~":
            return Strikethrough, closer.remaining
        if opener.remaining >= 2 and closer.remaining >= 2:
            return Strong, 2
        return Emphasis, 1

    @staticmethod
    def _build(items: list) -> tuple[InlineNode, ...]:
        """Fold the flat item list into nested nodes."""
        frames = [_Frame(span=None)]

        for item in items:
            if isinstance(item, Text):
                _append_text(frames[-1].children, item.content)
            elif isinstance(item, _Slot):
                for marker in item.closes:
                    frame = frames.pop()
                    parent = frames[-1].children
                    if frame.children:
                        parent.append(frame.span(tuple(frame.children)))
                    else:
                        _append_text(parent, frame.literal + marker.literal)
                _append_text(frames[-1].children, item.char * item.remaining)
                for marker in item.opens:
                    frames.append(_Frame(span=marker.span, literal=marker.literal))
            else:
                frames[-1].children.append(item)

        return tuple(frames[0].children)
