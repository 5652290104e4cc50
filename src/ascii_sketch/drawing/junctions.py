"""Junction fixup — make independently drawn strokes merge into box-drawing topology.

After a stroke is staged, every cell it touched is re-derived from the glyphs
around it: each axis neighbour that has an arm facing the cell contributes an
arm, and the resulting arm set picks the corner, tee, cross or straight edge.
"""

from __future__ import annotations

from collections.abc import Iterable

from ascii_sketch.drawing.charset import DEFAULT_SYMBOLS, Arms, Symbols
from ascii_sketch.editor.buffer import BLANK, Buffer
from ascii_sketch.types import Position


def _glyph(buf: Buffer, x: int, y: int) -> str:
    if x < 0 or y < 0:
        return BLANK
    c = buf.glyph_at(Position(x, y))
    return BLANK if c is None else c


def neighbour_arms(buf: Buffer, pos: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> Arms:
    """Return which axis neighbours of ``pos`` reach toward it."""
    return Arms(
        up=symbols.connects_down(_glyph(buf, pos.x, pos.y - 1)),
        down=symbols.connects_up(_glyph(buf, pos.x, pos.y + 1)),
        left=symbols.connects_right(_glyph(buf, pos.x - 1, pos.y)),
        right=symbols.connects_left(_glyph(buf, pos.x + 1, pos.y)),
    )


def fixup_point(buf: Buffer, pos: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> str:
    """Return the glyph ``pos`` should hold given its neighbours."""
    current = _glyph(buf, pos.x, pos.y)

    if symbols.is_arrow_tip(current):
        return current
    if current != BLANK and not symbols.is_joinable(current):
        return current

    arms = neighbour_arms(buf, pos, symbols)
    if arms.count() < 2 and current in (BLANK, symbols.plus):
        # A line end stays a junction; a lone arm only extends box edges.
        return current
    return arms.to_glyph(symbols, current)


def fixup(buf: Buffer, points: Iterable[Position], symbols: Symbols = DEFAULT_SYMBOLS) -> None:
    """Re-derive the junction glyph of every point and stage the changes.

    All replacements are computed against the same view before any is
    written, so the result does not depend on the order of ``points``.
    """
    changes: list[tuple[Position, str]] = []
    for pos in dict.fromkeys(points):
        c = fixup_point(buf, pos, symbols)
        if c != _glyph(buf, pos.x, pos.y):
            changes.append((pos, c))

    for pos, c in changes:
        buf.set(pos, c, force=True, symbols=symbols)
