"""Lexer turning raw Markdown into a stream of primitive tokens."""

import string
import unicodedata
from typing import Iterator, Optional

from sani.formatting.tokens import (
    DelimiterRun,
    LineBreakHard,
    LineBreakSoft,
    ParagraphBreak,
    TextRun,
    Token,
)

DELIMITER_CHARS = frozenset("*_~")
ESCAPABLE_CHARS = frozenset(string.punctuation)
HARD_BREAK_SPACES = "  "
INDENT_CHARS = " \t"


def is_whitespace(char: Optional[str]) -> bool:
    """Whitespace test where None (start or end of input) counts as whitespace."""
    return char is None or char.isspace()


def is_punctuation(char: Optional[str]) -> bool:
    """ASCII punctuation plus Unicode punctuation and symbol categories."""
    if char is None:
        return False
    return char in ESCAPABLE_CHARS or unicodedata.category(char)[0] in ("P", "S")


def classify_flanking(
    before: Optional[str], after: Optional[str]
) -> tuple[bool, bool]:
    """Return (left_flanking, right_flanking) for a run between two characters.

    A run is left-flanking if it is not followed by whitespace, and either
    not followed by punctuation or preceded by whitespace or punctuation.
    Right-flanking is the mirror image.
    """
    left = not is_whitespace(after) and (
        not is_punctuation(after) or is_whitespace(before) or is_punctuation(before)
    )
    right = not is_whitespace(before) and (
        not is_punctuation(before) or is_whitespace(after) or is_punctuation(after)
    )
    return left, right


class TokenStream:
    """Single-pass token iterator with one token of lookahead."""

    def __init__(self, tokens: Iterator[Token]) -> None:
        self._tokens = tokens
        self._buffer: list[Token] = []

    def __iter__(self) -> "TokenStream":
        return self

    def __next__(self) -> Token:
        if self._buffer:
            return self._buffer.pop()
        return next(self._tokens)

    def peek(self) -> Optional[Token]:
        """Return the next token without consuming it, or None at the end."""
        if not self._buffer:
            token = next(self._tokens, None)
            if token is None:
                return None
            self._buffer.append(token)
        return self._buffer[0]


class Lexer:
    """Scan Markdown source into text runs, delimiter runs and breaks.

    Pending text is tracked as a start index into the source; escapes
    and stripped whitespace split it into pieces that are joined when a
    TextRun is emitted.
    """

    def __init__(self, text: str) -> None:
        self.text = text.replace("\r\n", "\n").replace("\r", "\n")
        self._pos = 0
        self._segment_start = 0
        self._pieces: list[str] = []

    def __iter__(self) -> Iterator[Token]:
        return self.tokens()

    def tokens(self) -> Iterator[Token]:
        """Yield tokens for the whole input."""
        text = self.text
        self._pos = self._segment_start = self._skip_blank_lines(0)
        self._pieces = []

        while self._pos < len(text):
            char = text[self._pos]
            if char == "\n":
                yield from self._line_end(self._pos, self._pos)
            elif char == "\\":
                yield from self._escape()
            elif char in DELIMITER_CHARS:
                yield from self._delimiter_run(char)
            else:
                self._pos += 1

        self._hold(len(text))
        token = self._flush(rstrip=True)
        if token is not None:
            yield token

    def _hold(self, end: int) -> None:
        """Move source text up to `end` into the pending pieces."""
        self._pieces.append(self.text[self._segment_start:end])
        self._segment_start = end

    def _flush(self, rstrip: bool = False) -> Optional[TextRun]:
        content = "".join(self._pieces)
        self._pieces = []
        if rstrip:
            content = content.rstrip(INDENT_CHARS)
        return TextRun(content) if content else None

    def _skip_indent(self, pos: int) -> int:
        while pos < len(self.text) and self.text[pos] in INDENT_CHARS:
            pos += 1
        return pos

    def _skip_blank_lines(self, pos: int) -> int:
        """From a line start, skip blank lines and the next line's indentation."""
        text = self.text
        pos = self._skip_indent(pos)
        while pos < len(text) and text[pos] == "\n":
            pos = self._skip_indent(pos + 1)
        return pos

    def _line_end(self, text_end: int, newline: int, hard: bool = False) -> Iterator[Token]:
        """Handle the newline at `newline`; pending text stops at `text_end`."""
        text = self.text
        raw = text[self._segment_start:text_end]
        if not hard and raw.endswith(HARD_BREAK_SPACES):
            hard = raw[: -len(HARD_BREAK_SPACES)][-1:] not in (" ", "\t")

        self._hold(text_end)
        token = self._flush(rstrip=True)
        if token is not None:
            yield token

        pos = self._skip_indent(newline + 1)
        if pos < len(text) and text[pos] == "\n":
            pos = self._skip_blank_lines(pos)
            self._pos = self._segment_start = pos
            if pos < len(text):
                yield ParagraphBreak()
            return

        self._pos = self._segment_start = pos
        if pos < len(text):
            yield LineBreakHard() if hard else LineBreakSoft()

    def _escape(self) -> Iterator[Token]:
        """Handle a backslash at the current position."""
        text = self.text
        pos = self._pos
        following = pos + 1

        if following >= len(text):
            # a trailing backslash is dropped
            self._hold(pos)
            self._pos = self._segment_start = len(text)
            return

        char = text[following]
        if char == "\n":
            yield from self._line_end(pos, following, hard=True)
        elif char in ESCAPABLE_CHARS:
            self._hold(pos)
            self._pieces.append(char)
            self._pos = self._segment_start = following + 1
        else:
            self._pos = following

    def _delimiter_run(self, char: str) -> Iterator[Token]:
        """Emit a delimiter run starting at the current position."""
        text = self.text
        start = self._pos
        end = start
        while end < len(text) and text[end] == char:
            end += 1

        if char == "~" and end - start == 1:
            self._pos = end
            return

        self._hold(start)
        token = self._flush()
        if token is not None:
            yield token

        before = text[start - 1] if start > 0 else None
        after = text[end] if end < len(text) else None
        left, right = classify_flanking(before, after)
        yield DelimiterRun(
            char=char,
            length=end - start,
            left_flanking=left,
            right_flanking=right,
            preceded_by_punctuation=is_punctuation(before),
            followed_by_punctuation=is_punctuation(after),
        )
        self._pos = self._segment_start = end


def tokenize(text: str) -> TokenStream:
    """Tokenize Markdown source into a peekable token stream."""
    return TokenStream(Lexer(text).tokens())
