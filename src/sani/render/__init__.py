"""Output renderers for parsed documents."""

from sani.render.base import Renderer
from sani.render.ansi import AnsiRenderer
from sani.render.plain import PlainRenderer
from sani.render.segments import StyledSegment, StyleScope, iter_segments
from sani.render.styles import (
    StyleMap,
    codes_for_change,
    format_style,
    parse_style,
)

__all__ = [
    "Renderer",
    "AnsiRenderer",
    "PlainRenderer",
    "StyledSegment",
    "StyleScope",
    "iter_segments",
    "StyleMap",
    "codes_for_change",
    "format_style",
    "parse_style",
    "get_renderer",
]

# Map renderer names to renderer classes
RENDERER_MAP: dict[str, type[Renderer]] = {
    "ansi": AnsiRenderer,
    "plain": PlainRenderer,
}

RENDERER_NAMES = tuple(RENDERER_MAP.keys())


def get_renderer(name: str) -> type[Renderer]:
    """Get the renderer class registered under a name."""
    key = name.lower()
    if key not in RENDERER_MAP:
        raise ValueError(
            f"Unknown renderer: {key}. "
            f"Available renderers: {', '.join(RENDERER_NAMES)}"
        )
    return RENDERER_MAP[key]
