"""Terminal attributes, SGR escape codes and the construct-to-style map."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sani.formatting.ir import Emphasis, Span, Strikethrough, Strong, TextStyle

if TYPE_CHECKING:
    from sani.config import Settings

# (attribute, enable code, disable code); order is the emission order
SGR_CODES: tuple[tuple[TextStyle, int, int], ...] = (
    (TextStyle.BOLD, 1, 22),
    (TextStyle.DIM, 2, 22),
    (TextStyle.ITALIC, 3, 23),
    (TextStyle.UNDERLINE, 4, 24),
    (TextStyle.STRIKETHROUGH, 9, 29),
)

STYLE_NAMES: dict[str, TextStyle] = {
    "none": TextStyle.NONE,
    "bold": TextStyle.BOLD,
    "dim": TextStyle.DIM,
    "italic": TextStyle.ITALIC,
    "underline": TextStyle.UNDERLINE,
    "strikethrough": TextStyle.STRIKETHROUGH,
    "strike": TextStyle.STRIKETHROUGH,
}


def sgr(code: int) -> str:
    return f"\x1b[{code}m"


def parse_style(value: str) -> TextStyle:
    """Parse a style such as "dim+strikethrough" into TextStyle flags.

    Raises:
        ValueError: If an attribute name is not known
    """
    style = TextStyle.NONE
    for name in value.replace(",", "+").split("+"):
        name = name.strip().lower()
        if not name:
            continue
        if name not in STYLE_NAMES:
            raise ValueError(
                f"Unknown text attribute: {name!r}. "
                f"Known attributes: {', '.join(sorted(STYLE_NAMES))}"
            )
        style |= STYLE_NAMES[name]
    return style


def format_style(style: TextStyle) -> str:
    """Inverse of parse_style."""
    names = [name for name, flag in STYLE_NAMES.items()
             if flag and flag in style and name != "strike"]
    return "+".join(names) or "none"


def start_codes(style: TextStyle) -> str:
    """Escape codes enabling every attribute in `style`."""
    return "".join(sgr(on) for flag, on, _ in SGR_CODES if flag in style)


def end_codes(style: TextStyle) -> str:
    """Escape codes disabling every attribute in `style`."""
    emitted: list[int] = []
    for flag, _, off in SGR_CODES:
        if flag in style and off not in emitted:
            emitted.append(off)
    return "".join(sgr(off) for off in emitted)


def codes_for_change(new: TextStyle, previous: TextStyle) -> str:
    """Minimal escape codes that turn `previous` into `new`.

    Disables discontinued attributes, then enables new ones. An attribute
    kept from `previous` is re-enabled when a disable code it shares with
    a discontinued attribute switched it off too (bold and dim both end
    with 22).
    """
    removed = TextStyle.NONE
    added = TextStyle.NONE
    for flag, _, _ in SGR_CODES:
        if flag in previous and flag not in new:
            removed |= flag
        elif flag in new and flag not in previous:
            added |= flag

    cleared = {off for flag, _, off in SGR_CODES if flag in removed}
    for flag, _, off in SGR_CODES:
        if flag in previous and flag in new and off in cleared:
            added |= flag

    return end_codes(removed) + start_codes(added)


@dataclass(frozen=True)
class StyleMap:
    """Terminal attributes applied for each kind of span.

    Attributes:
        emphasis: Style for *emphasis*
        strong: Style for **strong** text
        strikethrough: Style for ~~strikethrough~~
    """

    emphasis: TextStyle = TextStyle.ITALIC
    strong: TextStyle = TextStyle.BOLD
    strikethrough: TextStyle = TextStyle.STRIKETHROUGH

    def style_for(self, span: Span) -> TextStyle:
        """Get the style for a span node."""
        if isinstance(span, Strong):
            return self.strong
        if isinstance(span, Strikethrough):
            return self.strikethrough
        if isinstance(span, Emphasis):
            return self.emphasis
        return TextStyle.NONE

    @classmethod
    def from_settings(cls, settings: "Settings") -> "StyleMap":
        """Build a style map from configured style strings."""
        return cls(
            emphasis=parse_style(settings.emphasis_style),
            strong=parse_style(settings.strong_style),
            strikethrough=parse_style(settings.strikethrough_style),
        )
