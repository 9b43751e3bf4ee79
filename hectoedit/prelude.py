"""Basic coordinate and size types shared across the editor."""

from __future__ import annotations

from dataclasses import dataclass

NAME = "hectoedit"
VERSION = "0.1.0"


@dataclass(frozen=True)
class Location:
    """A position inside the document, in graphemes and lines."""

    grapheme_idx: int = 0
    line_idx: int = 0


@dataclass(frozen=True)
class Position:
    """A position on screen, in columns and rows."""

    col: int = 0
    row: int = 0

    def saturating_sub(self, other: Position) -> Position:
        """Subtract component-wise, clamping each component at zero."""
        return Position(
            col=max(0, self.col - other.col),
            row=max(0, self.row - other.row),
        )


@dataclass(frozen=True)
class Size:
    """Dimensions of a screen area."""

    height: int = 0
    width: int = 0