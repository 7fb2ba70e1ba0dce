"""Lexing, delimiter resolution and the inline IR."""

from sani.formatting.ir import (
    TextStyle,
    Text,
    Span,
    Emphasis,
    Strong,
    Strikethrough,
    SoftBreak,
    HardBreak,
    ParagraphBoundary,
    InlineNode,
    Paragraph,
    Document,
)
from sani.formatting.tokens import (
    TextRun,
    DelimiterRun,
    LineBreakSoft,
    LineBreakHard,
    ParagraphBreak,
    Token,
)
from sani.formatting.lexer import Lexer, TokenStream, tokenize
from sani.formatting.resolver import DelimiterResolver
from sani.formatting.parser import MarkdownParser, parse

__all__ = [
    "TextStyle",
    "Text",
    "Span",
    "Emphasis",
    "Strong",
    "Strikethrough",
    "SoftBreak",
    "HardBreak",
    "ParagraphBoundary",
    "InlineNode",
    "Paragraph",
    "Document",
    "TextRun",
    "DelimiterRun",
    "LineBreakSoft",
    "LineBreakHard",
    "ParagraphBreak",
    "Token",
    "Lexer",
    "TokenStream",
    "tokenize",
    "DelimiterResolver",
    "MarkdownParser",
    "parse",
]
