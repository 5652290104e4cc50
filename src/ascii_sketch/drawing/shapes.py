"""Composite drawing operations: boxes, lines and arrows per path mode, erase, move, text."""

from __future__ import annotations

from dataclasses import dataclass, field

from ascii_sketch.drawing.charset import DEFAULT_SYMBOLS, Symbols
from ascii_sketch.drawing.junctions import fixup
from ascii_sketch.drawing.pathfinder import draw_path, snap45, snap90
from ascii_sketch.drawing.raster import draw_line, line_slope
from ascii_sketch.editor.buffer import BLANK, Buffer
from ascii_sketch.types import Position, PathMode, Shape


@dataclass
class DrawRequest:
    """One connector or box gesture, from the pointer press to its current position."""

    source: Position
    destination: Position
    shape: Shape = Shape.Line
    mode: PathMode = field(default_factory=PathMode.default)
    symbols: Symbols = DEFAULT_SYMBOLS


def apply_request(buf: Buffer, request: DrawRequest) -> list[Position]:
    """Stage ``request`` into the overlay and return the cells it touched."""
    src, dst, symbols = request.source, request.destination, request.symbols
    match request.shape:
        case Shape.Box:
            return draw_box(buf, src, dst, symbols)
        case Shape.Arrow:
            return draw_arrow_on_buffer(buf, src, dst, request.mode, symbols)
        case _:
            return draw_line_on_buffer(buf, src, dst, request.mode, symbols)


# ─── Boxes ───────────────────────────────────────────────────────────────────


def box_outline(top_left: Position, bottom_right: Position) -> list[Position]:
    """Return the perimeter cells of a rectangle, clockwise from the top-left corner."""
    x0, y0 = top_left.x, top_left.y
    x1, y1 = bottom_right.x, bottom_right.y
    outline = [Position(x, y0) for x in range(x0, x1 + 1)]
    outline += [Position(x1, y) for y in range(y0 + 1, y1 + 1)]
    outline += [Position(x, y1) for x in range(x1 - 1, x0 - 1, -1)]
    outline += [Position(x0, y) for y in range(y1 - 1, y0, -1)]
    return outline


def draw_box(buf: Buffer, src: Position, dst: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> list[Position]:
    """Stage a box with corners at ``src`` and ``dst`` and join it to its neighbours."""
    x0, x1 = sorted((src.x, dst.x))
    y0, y1 = sorted((src.y, dst.y))

    if x0 == x1 or y0 == y1:
        buf.set(src, symbols.ubox, symbols=symbols)
        return [src]

    corners = {
        Position(x0, y0): symbols.tlcorn,
        Position(x1, y0): symbols.trcorn,
        Position(x0, y1): symbols.blcorn,
        Position(x1, y1): symbols.brcorn,
    }

    outline = box_outline(Position(x0, y0), Position(x1, y1))
    for pos in outline:
        if pos in corners:
            c = corners[pos]
        elif pos.y == y0 or pos.y == y1:
            c = symbols.hline
        else:
            c = symbols.vline
        buf.set(pos, c, symbols=symbols)

    fixup(buf, outline, symbols)
    return outline


# ─── Lines and arrows ────────────────────────────────────────────────────────


def _elbow(buf: Buffer, src: Position, dst: Position, mode: PathMode, symbols: Symbols) -> Position:
    if mode == PathMode.Elbow90:
        return snap90(buf, src, dst, symbols)
    return snap45(src, dst)


def draw_line_on_buffer(
    buf: Buffer, src: Position, dst: Position, mode: PathMode, symbols: Symbols = DEFAULT_SYMBOLS
) -> list[Position]:
    if mode == PathMode.Routed:
        points = draw_path(buf, src, dst, symbols)
    elif mode == PathMode.Straight:
        points = draw_line(buf, src, dst, symbols)
    else:
        mid = _elbow(buf, src, dst, mode, symbols)
        points = draw_line(buf, src, mid, symbols)
        points += draw_line(buf, mid, dst, symbols)

    fixup(buf, points, symbols)
    return points


def draw_arrow_on_buffer(
    buf: Buffer, src: Position, dst: Position, mode: PathMode, symbols: Symbols = DEFAULT_SYMBOLS
) -> list[Position]:
    if mode == PathMode.Routed:
        points = draw_path(buf, src, dst, symbols)
        fixup(buf, points, symbols)
        last = points[-2] if len(points) > 1 else src
        draw_arrow_tip(buf, last, dst, symbols)
        return points

    mid = dst if mode == PathMode.Straight else _elbow(buf, src, dst, mode, symbols)

    if mid != dst:
        points = draw_line(buf, src, mid, symbols)
        points += draw_line(buf, mid, dst, symbols)
        fixup(buf, points, symbols)
        draw_arrow_tip(buf, mid, dst, symbols)
    else:
        points = draw_line(buf, src, dst, symbols)
        fixup(buf, points, symbols)
        draw_arrow_tip(buf, src, dst, symbols)
    return points


def draw_arrow_tip(buf: Buffer, src: Position, dst: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> str:
    """Stamp the arrow head for a segment arriving at ``dst`` from ``src``.

    A head that lands against existing content turns to point into it.
    """
    north = dst.y > 0 and buf.is_visible(Position(dst.x, dst.y - 1))
    east = buf.is_visible(Position(dst.x + 1, dst.y))
    south = buf.is_visible(Position(dst.x, dst.y + 1))
    west = dst.x > 0 and buf.is_visible(Position(dst.x - 1, dst.y))

    match line_slope(src, dst):
        case (0, -1):
            if north or (west and east):
                tip = symbols.n
            elif west:
                tip = symbols.w
            elif east:
                tip = symbols.e
            else:
                tip = symbols.n
        case (1, 0):
            if east or (north and south):
                tip = symbols.e
            elif north:
                tip = symbols.n
            elif south:
                tip = symbols.s
            else:
                tip = symbols.e
        case (0, 1):
            if south or (east and west):
                tip = symbols.s
            elif east:
                tip = symbols.e
            elif west:
                tip = symbols.w
            else:
                tip = symbols.s
        case (-1, 0):
            if west or (south and north):
                tip = symbols.w
            elif south:
                tip = symbols.s
            elif north:
                tip = symbols.n
            else:
                tip = symbols.w
        case (x, y) if x > 0 and y != 0:  # se, ne
            tip = symbols.e if east else (symbols.s if y > 0 else symbols.n)
        case (x, y) if x < 0 and y != 0:  # sw, nw
            vertical = symbols.s if y > 0 else symbols.n
            if dst.x == 0:
                tip = vertical
            else:
                tip = symbols.w if west else vertical
        case _:
            tip = symbols.plus

    buf.set(dst, tip, force=True, symbols=symbols)
    return tip


# ─── Erase, move, text ───────────────────────────────────────────────────────


def erase_on_buffer(buf: Buffer, src: Position, dst: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> None:
    """Blank every visible cell in the rectangle spanned by ``src`` and ``dst``."""
    for cell in buf.visible_cells(src, dst):
        buf.set(cell.pos, BLANK, force=True, symbols=symbols)
    buf.set_cursor(dst)


def move_on_buffer(
    buf: Buffer,
    selection: tuple[Position, Position],
    anchor: Position,
    to: Position,
    symbols: Symbols = DEFAULT_SYMBOLS,
) -> None:
    """Lift the visible cells of ``selection`` and put them down offset by ``to - anchor``."""
    cells = buf.visible_cells(*selection)

    for cell in cells:
        buf.set(cell.pos, BLANK, force=True, symbols=symbols)

    dx = to.x - anchor.x
    dy = to.y - anchor.y
    for cell in cells:
        moved = cell.translate(dx, dy)
        buf.set(moved.pos, moved.glyph, force=True, symbols=symbols)

    buf.set_cursor(to)


def write_text(
    buf: Buffer,
    origin: Position,
    text: str,
    caret: Position | None = None,
    symbols: Symbols = DEFAULT_SYMBOLS,
) -> None:
    """Stamp ``text`` with its first character at ``origin``.

    ``caret`` is relative to ``origin``; it defaults to just past the last character.
    """
    lines = text.split("\n")
    for dy, line in enumerate(lines):
        for dx, c in enumerate(line):
            buf.set(Position(origin.x + dx, origin.y + dy), c, force=True, symbols=symbols)

    if caret is None:
        caret = Position(len(lines[-1]), len(lines) - 1)
    buf.set_cursor(Position(origin.x + caret.x, origin.y + caret.y))
