"""Core rendering pipeline for sani."""

from sani.core.pipeline import (
    SaniError,
    InputEncodingError,
    RenderError,
    MarkdownRenderer,
    decode_source,
    wants_color,
)

__all__ = [
    "SaniError",
    "InputEncodingError",
    "RenderError",
    "MarkdownRenderer",
    "decode_source",
    "wants_color",
]
