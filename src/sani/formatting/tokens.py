"""Primitive tokens produced by the lexer.

Tokens are frozen; the resolver tracks match state for delimiter runs
externally, so a token never changes once produced.
"""

from dataclasses import dataclass
from typing import Literal, Union

DelimiterChar = Literal["*", "_", "~"]


@dataclass(frozen=True)
class TextRun:
    """Literal text between delimiters and breaks.

    Attributes:
        content: The text content, with escapes already applied
    """

    content: str


@dataclass(frozen=True)
class DelimiterRun:
    """A maximal run of one markup character.

    Attributes:
        char: The delimiter character ("*", "_" or "~")
        length: Number of consecutive delimiter characters
        left_flanking: Whether the run can start a span by position
        right_flanking: Whether the run can end a span by position
        preceded_by_punctuation: Whether the character before is punctuation
        followed_by_punctuation: Whether the character after is punctuation
    """

    char: DelimiterChar
    length: int
    left_flanking: bool
    right_flanking: bool
    preceded_by_punctuation: bool = False
    followed_by_punctuation: bool = False

    @property
    def can_open(self) -> bool:
        """Whether this run may open a span."""
        if self.char == "_":
            return self.left_flanking and (
                not self.right_flanking or self.preceded_by_punctuation
            )
        return self.left_flanking

    @property
    def can_close(self) -> bool:
        """Whether this run may close a span."""
        if self.char == "_":
            return self.right_flanking and (
                not self.left_flanking or self.followed_by_punctuation
            )
        return self.right_flanking

    @property
    def literal(self) -> str:
        return self.char * self.length


@dataclass(frozen=True)
class LineBreakSoft:
    """A single newline inside a paragraph."""


@dataclass(frozen=True)
class LineBreakHard:
    """Two trailing spaces (or a backslash) before a newline."""


@dataclass(frozen=True)
class ParagraphBreak:
    """One or more blank lines."""


Token = Union[TextRun, DelimiterRun, LineBreakSoft, LineBreakHard, ParagraphBreak]
