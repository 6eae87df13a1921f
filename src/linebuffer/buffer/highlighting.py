"""Highlight classes attached to every grapheme of a line."""

from __future__ import annotations

from enum import Enum

from rich.color import Color

_ESC = "\x1b["


def _sgr(codes: tuple[str, ...]) -> str:
    return f"{_ESC}{';'.join(codes)}m"


class HighlightClass(Enum):
    """How a single grapheme cluster is colored when rendered."""

    NONE = "none"
    NUMBER = "number"
    SEARCH = "search"

    @property
    def color(self) -> Color:
        if self is HighlightClass.NUMBER:
            return Color.from_rgb(220, 163, 163)
        if self is HighlightClass.SEARCH:
            return Color.from_rgb(38, 139, 210)
        return Color.from_rgb(255, 255, 255)

    def marker(self) -> str:
        """Truecolor foreground sequence switching the terminal to this class."""

        return _sgr(self.color.get_ansi_codes(foreground=True))


RESET_MARKER = _sgr(Color.default().get_ansi_codes(foreground=True))

__all__ = ["HighlightClass", "RESET_MARKER"]
