"""Buffer — the diagram grid, its pending-edit overlay and the cursor marker."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import BinaryIO

from ascii_sketch.drawing.charset import DEFAULT_SYMBOLS, Symbols
from ascii_sketch.types import Cell, CellKind, Position

logger = logging.getLogger(__name__)

BLANK = " "


class DiagramLoadError(Exception):
    """Raised when persisted diagram content cannot be read or decoded."""


def _is_only_whitespace(row: list[str]) -> bool:
    return all(c.isspace() for c in row)


class Buffer:
    """A ragged grid of glyphs plus an overlay of edits not yet flushed.

    Two buffers compare equal iff their grids are equal; the overlay and
    the cursor are ignored so that undo can detect no-op edits.
    """

    def __init__(self, rows: list[list[str]] | None = None) -> None:
        self.rows: list[list[str]] = rows if rows is not None else []
        self.edits: list[Cell] = []
        self.cursor: Position | None = None

    @classmethod
    def from_text(cls, text: str) -> Buffer:
        """Build a buffer with one grid row per line of ``text``."""
        lines = text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        return cls([list(line.removesuffix("\r")) for line in lines])

    @classmethod
    def read_from(cls, stream: BinaryIO) -> Buffer:
        """Read a UTF-8 encoded diagram from a binary stream."""
        try:
            data = stream.read()
        except OSError as e:
            raise DiagramLoadError(f"cannot read diagram: {e}") from e
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DiagramLoadError(f"diagram is not valid UTF-8: {e}") from e
        return cls.from_text(text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Buffer):
            return NotImplemented
        return self.rows == other.rows

    def __repr__(self) -> str:
        return f"Buffer(rows={len(self.rows)}, edits={len(self.edits)}, cursor={self.cursor})"

    def snapshot(self) -> Buffer:
        """Return a copy of the grid without pending edits or cursor."""
        return Buffer([list(row) for row in self.rows])

    def set_cursor(self, pos: Position) -> None:
        self.cursor = pos

    def drop_cursor(self) -> None:
        self.cursor = None

    def clear(self) -> None:
        self.rows.clear()
        self.edits.clear()
        self.cursor = None

    def bounds(self) -> tuple[int, int]:
        """Return the (columns, rows) a viewport needs to show all content."""
        cols = max((len(row) for row in self.rows), default=0)
        rows = len(self.rows)
        for cell in self.edits:
            cols = max(cols, cell.pos.x + 1)
            rows = max(rows, cell.pos.y + 1)
        if self.cursor is not None:
            cols = max(cols, self.cursor.x + 1)
            rows = max(rows, self.cursor.y + 1)
        return cols, rows

    # ─── Cell access ─────────────────────────────────────────────────────────

    def get(self, pos: Position) -> str | None:
        """Return the grid glyph at ``pos``, ignoring pending edits."""
        if pos.y < len(self.rows) and pos.x < len(self.rows[pos.y]):
            return self.rows[pos.y][pos.x]
        return None

    def is_visible(self, pos: Position) -> bool:
        """True iff the grid holds a non-whitespace glyph at ``pos``."""
        c = self.get(pos)
        return c is not None and not c.isspace()

    def glyph_at(self, pos: Position) -> str | None:
        """Return the glyph a flush would leave at ``pos``."""
        for cell in reversed(self.edits):
            if cell.pos == pos:
                return cell.glyph
        return self.get(pos)

    def set(self, pos: Position, glyph: str, *, force: bool = False, symbols: Symbols = DEFAULT_SYMBOLS) -> None:
        """Stage ``glyph`` at ``pos`` in the overlay.

        Unless ``force`` is set, the write is dropped when the grid or an
        earlier overlay entry already holds the same glyph or one of higher
        rank at that position.
        """
        if not force:
            rank = symbols.rank(glyph)

            def overrides(existing: str) -> bool:
                return existing == glyph or symbols.rank(existing) > rank

            existing = self.get(pos)
            if existing is not None and overrides(existing):
                return
            if any(cell.pos == pos and overrides(cell.glyph) for cell in self.edits):
                return
        self.edits.append(Cell(pos, glyph))

    def flush(self) -> None:
        """Apply pending edits to the grid, growing it as needed."""
        for cell in self.edits:
            x, y = cell.pos.x, cell.pos.y
            if len(self.rows) <= y:
                self.rows.extend([] for _ in range(y + 1 - len(self.rows)))
            row = self.rows[y]
            if len(row) <= x:
                row.extend(BLANK * (x + 1 - len(row)))
            row[x] = cell.glyph
        self.edits.clear()

    def discard(self) -> None:
        self.edits.clear()

    # ─── Iteration ───────────────────────────────────────────────────────────

    def iter_within(
        self, offset: Position, size: tuple[int, int], symbols: Symbols = DEFAULT_SYMBOLS
    ) -> Iterator[tuple[CellKind, Cell]]:
        """Yield grid cells, overlay entries and the cursor inside a window."""
        width, height = size
        x_end = offset.x + width
        y_end = offset.y + height

        for y in range(offset.y, min(y_end, len(self.rows))):
            row = self.rows[y]
            for x in range(offset.x, min(x_end, len(row))):
                yield CellKind.Clean, Cell(Position(x, y), row[x])

        for cell in self.edits:
            if offset.x <= cell.pos.x < x_end and offset.y <= cell.pos.y < y_end:
                yield CellKind.Dirty, cell

        if self.cursor is not None:
            yield CellKind.Cursor, Cell(self.cursor, symbols.cursor)

    def visible_cells(self, a: Position, b: Position) -> list[Cell]:
        """Return the non-blank glyphs a flush would leave in the rectangle spanned by ``a`` and ``b``.

        Overlay entries shadow the grid cell at the same position.
        """
        top_left = Position(min(a.x, b.x), min(a.y, b.y))
        size = (abs(a.x - b.x) + 1, abs(a.y - b.y) + 1)
        cells: dict[Position, Cell] = {}
        for kind, cell in self.iter_within(top_left, size):
            if kind != CellKind.Cursor:
                cells[cell.pos] = cell
        return [cell for cell in cells.values() if not cell.is_whitespace()]

    # ─── Serialization ───────────────────────────────────────────────────────

    def render(self, prefix: str = "") -> str:
        """Return the grid as text, one line per row, each starting with ``prefix``."""
        return "".join(prefix + "".join(row) + "\n" for row in self.rows)

    def to_bytes(self, prefix: str = "") -> bytes:
        return self.render(prefix).encode("utf-8")

    # ─── Whitespace policy ───────────────────────────────────────────────────

    def strip_trailing_whitespace(self) -> None:
        for row in self.rows:
            while row and row[-1].isspace():
                row.pop()

    def strip_margin_whitespace(self) -> None:
        """Remove blank margins on all four sides of the diagram."""
        while self.rows and _is_only_whitespace(self.rows[0]):
            self.rows.pop(0)
        while self.rows and _is_only_whitespace(self.rows[-1]):
            self.rows.pop()

        indents = [
            next(i for i, c in enumerate(row) if not c.isspace())
            for row in self.rows
            if not _is_only_whitespace(row)
        ]
        if indents:
            min_ws = min(indents)
            for i, row in enumerate(self.rows):
                if not row:
                    continue
                idx = min(len(row) - 1, min_ws)
                self.rows[i] = row[idx:]

        self.strip_trailing_whitespace()
