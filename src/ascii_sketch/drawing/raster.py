"""Straight-line rasterization and slope-to-glyph selection."""

from __future__ import annotations

from collections.abc import Iterator
from itertools import pairwise
from math import gcd

from ascii_sketch.drawing.charset import DEFAULT_SYMBOLS, Symbols
from ascii_sketch.editor.buffer import Buffer
from ascii_sketch.types import Position


def bresenham(src: Position, dst: Position) -> Iterator[Position]:
    """Yield the 8-connected cells on the line from ``src`` to ``dst``, both inclusive."""
    x, y = src.x, src.y
    dx = abs(dst.x - x)
    dy = -abs(dst.y - y)
    sx = 1 if x < dst.x else -1
    sy = 1 if y < dst.y else -1
    err = dx + dy

    while True:
        yield Position(x, y)
        if x == dst.x and y == dst.y:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x += sx
        if e2 <= dx:
            err += dx
            y += sy


def line_slope(src: Position, dst: Position) -> tuple[int, int]:
    """Return the slope from ``src`` to ``dst`` reduced to its simplest terms."""
    dx = dst.x - src.x
    dy = dst.y - src.y
    d = gcd(dx, dy)
    if d == 0:
        return (dx, dy)
    return (dx // d, dy // d)


def slope_glyph(slope: tuple[int, int], symbols: Symbols = DEFAULT_SYMBOLS) -> str:
    match slope:
        case (0, _):
            return symbols.pipe
        case (_, 0):
            return symbols.dash
        case (x, y) if (x > 0) == (y > 0):
            return symbols.gaid
        case _:
            return symbols.diag


def draw_line(buf: Buffer, src: Position, dst: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> list[Position]:
    """Stage a straight line from ``src`` to ``dst`` and return the cells it covers.

    Both endpoints carry the junction glyph; every other cell takes the glyph
    for the slope toward the next cell.
    """
    points = list(bresenham(src, dst))
    for i, (s, e) in enumerate(pairwise(points)):
        if i == 0:
            buf.set(s, symbols.plus, force=True, symbols=symbols)
        else:
            buf.set(s, slope_glyph(line_slope(s, e), symbols), symbols=symbols)
    buf.set(dst, symbols.plus, force=True, symbols=symbols)
    return points
