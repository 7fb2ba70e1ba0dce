"""Markdown parser for converting source text to IR."""

import logging
from typing import Optional

from sani.formatting.ir import Document, Paragraph
from sani.formatting.lexer import tokenize
from sani.formatting.resolver import DelimiterResolver
from sani.formatting.tokens import LineBreakHard, LineBreakSoft, ParagraphBreak, Token

logger = logging.getLogger(__name__)

_LINE_BREAKS = (LineBreakSoft, LineBreakHard)


class MarkdownParser:
    """Parse paragraphs of inline Markdown into a Document."""

    def __init__(self, resolver: Optional[DelimiterResolver] = None) -> None:
        self.resolver = resolver or DelimiterResolver()

    def parse(self, markdown_text: str, metadata: Optional[dict] = None) -> Document:
        """Convert markdown text to a Document.

        Args:
            markdown_text: The Markdown source
            metadata: Optional information about where the source came from

        Returns:
            Document with one Paragraph per block of text
        """
        paragraphs: list[Paragraph] = []
        pending: list[Token] = []
        stream = tokenize(markdown_text)

        for token in stream:
            if isinstance(token, ParagraphBreak):
                self._flush(pending, paragraphs)
                pending = []
                continue

            if isinstance(token, _LINE_BREAKS):
                # breaks never start or end a paragraph
                following = stream.peek()
                if not pending or following is None or isinstance(following, ParagraphBreak):
                    continue

            pending.append(token)

        self._flush(pending, paragraphs)
        logger.debug("Parsed %d paragraph(s)", len(paragraphs))
        return Document(paragraphs=tuple(paragraphs), metadata=metadata or {})

    def _flush(self, tokens: list[Token], paragraphs: list[Paragraph]) -> None:
        """Resolve one paragraph's tokens, skipping empty paragraphs."""
        if not tokens:
            return
        nodes = self.resolver.resolve(tokens)
        if nodes:
            paragraphs.append(Paragraph(nodes=nodes))

    def to_plain_text(self, doc: Document) -> str:
        """Convert a Document back to plain text."""
        return doc.plain_text


def parse(markdown_text: str) -> Document:
    """Parse Markdown with a default parser."""
    return MarkdownParser().parse(markdown_text)
