"""Shared type definitions for ascii-sketch.

Small value types and enums used across the drawing engine, the buffer
and the document layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


@dataclass(frozen=True, order=True)
class Position:
    """A cell address in character coordinates (column, row)."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> Position:
        """Translate by (dx, dy), clamping each axis at zero."""
        return Position(max(0, self.x + dx), max(0, self.y + dy))

    def pair(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Cell:
    pos: Position
    glyph: str

    def is_whitespace(self) -> bool:
        return self.glyph.isspace()

    def translate(self, dx: int, dy: int) -> Cell:
        return Cell(self.pos.offset(dx, dy), self.glyph)


class CellKind(Enum):
    Clean = auto()  # committed grid content
    Dirty = auto()  # pending overlay entry
    Cursor = auto()


class PathMode(Enum):
    Straight = "straight"
    Elbow90 = "elbow90"
    Elbow45 = "elbow45"
    Routed = "routed"

    @classmethod
    def default(cls) -> PathMode:
        return cls.Elbow90

    @classmethod
    def parse(cls, name: str) -> PathMode:
        try:
            return cls(name.lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown path mode '{name}'; use {choices}") from None


class Shape(Enum):
    Line = auto()
    Arrow = auto()
    Box = auto()
