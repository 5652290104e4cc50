"""Elbow snapping and A* connector routing on the character grid."""

from __future__ import annotations

import logging
from functools import lru_cache
from math import sqrt

import networkx as nx

from ascii_sketch.drawing.charset import DEFAULT_SYMBOLS, Symbols
from ascii_sketch.drawing.raster import line_slope, slope_glyph
from ascii_sketch.editor.buffer import Buffer
from ascii_sketch.types import Position

logger = logging.getLogger(__name__)

# Cost to move one step on the cardinal plane.
D: float = 1.0
# Cost to move one step on the diagonal plane.
D2: float = sqrt(2)
# Added for stepping onto visible content, and again for squeezing
# diagonally between two visible cells.
OCCUPIED_PENALTY: float = 64.0
# Scales the heuristic so that ties expand the node closest to the goal.
TIE_BREAK: float = 1.0 + 1.0 / 1000.0


class NoRouteFound(Exception):
    """Raised when the search exhausts without reaching the destination."""

    def __init__(self, src: Position, dst: Position) -> None:
        super().__init__(f"no route from {src.pair()} to {dst.pair()}")
        self.src = src
        self.dst = dst


# ─── Elbow snapping ──────────────────────────────────────────────────────────


def snap90(buf: Buffer, src: Position, dst: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> Position:
    """Return the right-angle elbow between ``src`` and ``dst``.

    Runs horizontally first when ``dst`` already sits on a horizontal line,
    vertically first otherwise.
    """
    if buf.get(dst) == symbols.dash:
        return Position(dst.x, src.y)
    return Position(src.x, dst.y)


def snap45(src: Position, dst: Position) -> Position:
    """Return the elbow where a 45° run from ``src`` turns straight toward ``dst``."""
    delta = min(abs(src.y - dst.y), abs(src.x - dst.x))

    match line_slope(src, dst):
        case (x, y) if x < 0 and y < 0:  # nw
            return Position(dst.x + delta, dst.y + delta)
        case (x, y) if x > 0 and y < 0:  # ne
            return Position(dst.x - delta, dst.y + delta)
        case (x, y) if x < 0 and y > 0:  # sw
            return Position(dst.x + delta, dst.y - delta)
        case (x, y) if x > 0 and y > 0:  # se
            return Position(dst.x - delta, dst.y - delta)
        case _:
            return src


# ─── A* search ───────────────────────────────────────────────────────────────


def heuristic(pos: Position, dst: Position) -> float:
    """Octile distance between ``pos`` and ``dst``, scaled for tie-breaking."""
    dx = abs(pos.x - dst.x)
    dy = abs(pos.y - dst.y)
    if dx > dy:
        dist = D * (dx - dy) + D2 * dy
    else:
        dist = D * (dy - dx) + D2 * dx
    return dist * TIE_BREAK


@lru_cache(maxsize=8)
def lattice(width: int, height: int) -> nx.Graph:
    """Build the 8-connected grid graph covering ``width`` x ``height`` cells."""
    graph = nx.Graph()
    for y in range(height):
        for x in range(width):
            p = Position(x, y)
            graph.add_node(p)
            if x + 1 < width:
                graph.add_edge(p, Position(x + 1, y), diagonal=False)
            if y + 1 < height:
                graph.add_edge(p, Position(x, y + 1), diagonal=False)
            if x + 1 < width and y + 1 < height:
                graph.add_edge(p, Position(x + 1, y + 1), diagonal=True)
                graph.add_edge(Position(x + 1, y), Position(x, y + 1), diagonal=True)
    return graph


def search_bounds(buf: Buffer, src: Position, dst: Position) -> tuple[int, int]:
    """Content extent covering both endpoints, with a one-cell margin to route around."""
    cols, rows = buf.bounds()
    width = max(cols, src.x + 1, dst.x + 1) + 1
    height = max(rows, src.y + 1, dst.y + 1) + 1
    return width, height


def step_cost(buf: Buffer, u: Position, v: Position) -> float:
    """Cost of moving from ``u`` to the adjacent cell ``v``."""
    diagonal = u.x != v.x and u.y != v.y
    cost = D2 if diagonal else D
    if buf.is_visible(v):
        cost += OCCUPIED_PENALTY
    if diagonal and buf.is_visible(Position(u.x, v.y)) and buf.is_visible(Position(v.x, u.y)):
        cost += OCCUPIED_PENALTY
    return cost


def path_cost(buf: Buffer, path: list[Position]) -> float:
    return sum(step_cost(buf, u, v) for u, v in zip(path, path[1:]))


def astar_path(
    buf: Buffer, src: Position, dst: Position, bounds: tuple[int, int] | None = None
) -> list[Position]:
    """Find the cheapest 8-directional route from ``src`` to ``dst``.

    Cells holding visible glyphs are expensive to cross but never forbidden.
    Raises NoRouteFound if ``dst`` cannot be reached within ``bounds``.
    """
    width, height = bounds if bounds is not None else search_bounds(buf, src, dst)
    graph = lattice(width, height)

    try:
        path = nx.astar_path(
            graph,
            src,
            dst,
            heuristic=heuristic,
            weight=lambda u, v, _attrs: step_cost(buf, u, v),
        )
    except (nx.NetworkXNoPath, nx.NodeNotFound) as e:
        logger.debug("route search %s -> %s failed in %dx%d grid", src, dst, width, height)
        raise NoRouteFound(src, dst) from e

    logger.debug("routed %s -> %s through %d cells", src, dst, len(path))
    return path


def draw_path(buf: Buffer, src: Position, dst: Position, symbols: Symbols = DEFAULT_SYMBOLS) -> list[Position]:
    """Route from ``src`` to ``dst``, stage its glyphs and return the route cells.

    A junction glyph marks both ends and every cell where the route turns.
    """
    path = astar_path(buf, src, dst)

    def decide(i: int, last: Position, pos: Position) -> str:
        if i == 0:
            return symbols.plus
        return slope_glyph(line_slope(last, pos), symbols)

    last = src
    for i, pos in enumerate(path):
        c = decide(i, last, pos)
        if i + 1 < len(path):
            nxt = decide(i + 1, pos, path[i + 1])
            if c != symbols.plus and nxt != c:
                c = symbols.plus
            last = pos
        buf.set(pos, c, force=c == symbols.plus, symbols=symbols)
    buf.set(dst, symbols.plus, force=True, symbols=symbols)

    return path
