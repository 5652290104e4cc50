"""Tests for drawing/pathfinder.py — elbow snapping and A* routing."""

from __future__ import annotations

from math import isclose, sqrt

import pytest

from ascii_sketch.drawing.pathfinder import (
    D2,
    OCCUPIED_PENALTY,
    TIE_BREAK,
    NoRouteFound,
    astar_path,
    draw_path,
    heuristic,
    path_cost,
    search_bounds,
    snap45,
    snap90,
    step_cost,
)
from ascii_sketch.drawing.raster import line_slope
from ascii_sketch.editor.buffer import Buffer
from ascii_sketch.types import Position

P = Position

# A solid wall in column 3, rows 0-4.
WALL = "\n".join(["   #"] * 5)


def assert_connected(path: list[Position]) -> None:
    for a, b in zip(path, path[1:]):
        assert max(abs(a.x - b.x), abs(a.y - b.y)) == 1, f"{a} -> {b}"


# ─── Snapping ────────────────────────────────────────────────────────────────


class TestSnap90:
    def test_vertical_first_by_default(self):
        assert snap90(Buffer(), P(0, 0), P(5, 3)) == P(0, 3)

    def test_horizontal_first_onto_dash(self):
        buf = Buffer.from_text("\n\n\n-------")
        assert snap90(buf, P(0, 0), P(5, 3)) == P(5, 0)


class TestSnap45:
    def test_south_east(self):
        assert snap45(P(0, 0), P(5, 2)) == P(3, 0)

    def test_north_west(self):
        assert snap45(P(5, 5), P(1, 3)) == P(3, 5)

    def test_north_east(self):
        assert snap45(P(0, 4), P(2, 0)) == P(0, 2)

    def test_south_west(self):
        assert snap45(P(4, 0), P(0, 1)) == P(1, 0)

    def test_cardinal_returns_source(self):
        assert snap45(P(1, 1), P(1, 6)) == P(1, 1)
        assert snap45(P(1, 1), P(6, 1)) == P(1, 1)

    def test_pure_diagonal_returns_source(self):
        assert snap45(P(0, 0), P(3, 3)) == P(0, 0)


# ─── Costs ───────────────────────────────────────────────────────────────────


class TestCosts:
    def test_heuristic_octile_with_tie_break(self):
        assert isclose(heuristic(P(0, 0), P(3, 0)), 3 * TIE_BREAK)
        assert isclose(heuristic(P(0, 0), P(2, 5)), (3 + 2 * sqrt(2)) * TIE_BREAK)

    def test_cardinal_and_diagonal_steps(self):
        buf = Buffer()
        assert step_cost(buf, P(0, 0), P(1, 0)) == 1.0
        assert isclose(step_cost(buf, P(0, 0), P(1, 1)), D2)

    def test_stepping_onto_content(self):
        buf = Buffer.from_text(" x")
        assert step_cost(buf, P(0, 0), P(1, 0)) == 1.0 + OCCUPIED_PENALTY

    def test_squeezing_between_two_occupied_cells(self):
        buf = Buffer.from_text(" #\n#")
        assert isclose(step_cost(buf, P(0, 0), P(1, 1)), D2 + OCCUPIED_PENALTY)

    def test_one_occupied_flank_is_free(self):
        buf = Buffer.from_text(" #")
        assert isclose(step_cost(buf, P(0, 0), P(1, 1)), D2)

    def test_search_bounds_cover_endpoints(self):
        assert search_bounds(Buffer.from_text("abc"), P(0, 0), P(5, 2)) == (7, 4)
        assert search_bounds(Buffer.from_text("abcdefgh\n\n\n\n"), P(0, 0), P(1, 1)) == (9, 5)


# ─── Routing ─────────────────────────────────────────────────────────────────


class TestAstarPath:
    def test_open_grid_goes_diagonal(self):
        path = astar_path(Buffer(), P(0, 0), P(5, 5))
        assert path == [P(i, i) for i in range(6)]

    def test_straight_run(self):
        path = astar_path(Buffer(), P(0, 0), P(4, 0))
        assert path == [P(x, 0) for x in range(5)]

    def test_same_cell(self):
        assert astar_path(Buffer(), P(2, 2), P(2, 2)) == [P(2, 2)]

    def test_routes_around_wall(self):
        buf = Buffer.from_text(WALL)
        path = astar_path(buf, P(0, 0), P(5, 5))
        assert path[0] == P(0, 0)
        assert path[-1] == P(5, 5)
        assert_connected(path)
        assert not any(buf.is_visible(p) for p in path)
        assert isclose(path_cost(buf, path), 4 + 3 * sqrt(2))

    def test_crosses_content_when_no_way_around(self):
        buf = Buffer.from_text("  #\n  #\n  #")
        path = astar_path(buf, P(0, 1), P(4, 1), bounds=(5, 3))
        assert path[-1] == P(4, 1)
        assert sum(buf.is_visible(p) for p in path) == 1

    def test_unreachable_destination(self):
        with pytest.raises(NoRouteFound) as exc:
            astar_path(Buffer(), P(0, 0), P(5, 5), bounds=(3, 3))
        assert exc.value.src == P(0, 0)
        assert exc.value.dst == P(5, 5)


class TestDrawPath:
    def test_straight_route_glyphs(self):
        buf = Buffer()
        draw_path(buf, P(0, 0), P(4, 0))
        buf.flush()
        assert "".join(buf.rows[0]) == "+---+"

    def test_turns_are_junctions(self):
        buf = Buffer()
        path = draw_path(buf, P(0, 0), P(6, 2))
        buf.flush()
        assert buf.get(path[0]) == "+"
        assert buf.get(path[-1]) == "+"
        turns = 0
        for prev, cur, nxt in zip(path, path[1:], path[2:]):
            if line_slope(prev, cur) != line_slope(cur, nxt):
                turns += 1
                assert buf.get(cur) == "+"
        assert turns >= 1

    def test_start_junction_is_forced(self):
        buf = Buffer.from_text("+")
        draw_path(buf, P(0, 0), P(3, 0))
        first = buf.edits[0]
        assert (first.pos, first.glyph) == (P(0, 0), "+")

    def test_route_avoids_wall(self):
        buf = Buffer.from_text(WALL)
        draw_path(buf, P(0, 0), P(5, 5))
        buf.flush()
        for y in range(5):
            assert buf.get(P(3, y)) == "#"
        assert buf.get(P(5, 5)) == "+"
