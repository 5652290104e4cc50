"""Document — the single owner of a diagram buffer, its history and its file."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from ascii_sketch.config import EditorOptions
from ascii_sketch.drawing.shapes import DrawRequest, apply_request
from ascii_sketch.editor.buffer import Buffer, DiagramLoadError
from ascii_sketch.editor.history import History
from ascii_sketch.types import Position

logger = logging.getLogger(__name__)


class Document:
    """An open diagram: buffer, undo history, options and save path.

    Renderers and tools reach the buffer only through ``read()`` and
    ``write()``, which hold the document lock for the duration of the block.
    """

    def __init__(self, options: EditorOptions | None = None) -> None:
        self.options = options if options is not None else EditorOptions()
        self.history = History()
        self._lock = threading.RLock()

    @classmethod
    def open(cls, options: EditorOptions) -> Document:
        """Create a document and load ``options.file`` if one is set."""
        doc = cls(options)
        if options.file is not None:
            doc.open_file(options.file)
        return doc

    @classmethod
    def from_text(cls, text: str, options: EditorOptions | None = None) -> Document:
        doc = cls(options)
        doc.history.reset(Buffer.from_text(text))
        return doc

    @property
    def buffer(self) -> Buffer:
        return self.history.buffer

    @property
    def path(self) -> Path | None:
        return self.options.file

    @contextmanager
    def read(self) -> Iterator[Buffer]:
        with self._lock:
            yield self.history.buffer

    @contextmanager
    def write(self) -> Iterator[Buffer]:
        with self._lock:
            yield self.history.buffer

    # ─── Queries ─────────────────────────────────────────────────────────────

    def is_dirty(self) -> bool:
        return self.history.dirty

    def bounds(self) -> tuple[int, int]:
        with self.read() as buf:
            return buf.bounds()

    def get(self, pos: Position) -> str | None:
        with self.read() as buf:
            return buf.get(pos)

    def is_visible(self, pos: Position) -> bool:
        with self.read() as buf:
            return buf.is_visible(pos)

    # ─── Editing ─────────────────────────────────────────────────────────────

    def preview(self, request: DrawRequest) -> list[Position]:
        """Replace the overlay with ``request`` without touching the grid."""
        with self.write() as buf:
            buf.discard()
            return apply_request(buf, request)

    def commit(self, request: DrawRequest) -> bool:
        """Draw ``request`` into the grid as one undoable edit."""
        return self.edit(lambda buf: apply_request(buf, request))

    def edit(self, stage: Callable[[Buffer], object]) -> bool:
        """Stage edits with ``stage``, flush them and record an undo entry if anything changed."""

        def mutator(buf: Buffer) -> None:
            stage(buf)
            buf.flush()

        with self._lock:
            return self.history.with_snapshot(mutator)

    def discard(self) -> None:
        """Drop pending edits and hide the cursor, e.g. when switching tools."""
        with self.write() as buf:
            buf.discard()
            buf.drop_cursor()

    def undo(self) -> bool:
        with self._lock:
            return self.history.undo()

    def redo(self) -> bool:
        with self._lock:
            return self.history.redo()

    def trim_margins(self) -> bool:
        return self.edit(lambda buf: buf.strip_margin_whitespace())

    # ─── Files ───────────────────────────────────────────────────────────────

    def clear(self) -> None:
        """Discard everything and begin a blank, unnamed diagram."""
        with self._lock:
            self.options.file = None
            self.history.reset(Buffer())

    def load(self, stream: BinaryIO) -> None:
        """Replace the diagram with one read from ``stream``; the save path is kept."""
        buffer = Buffer.read_from(stream)
        with self._lock:
            self.history.reset(buffer)

    def open_file(self, path: str | Path) -> None:
        """Load the diagram at ``path``, replacing the current one.

        A missing file opens as an empty diagram bound to ``path``. On any
        other failure DiagramLoadError is raised and nothing is modified.
        """
        path = Path(path)
        try:
            with path.open("rb") as f:
                buffer = Buffer.read_from(f)
        except FileNotFoundError:
            buffer = Buffer()
        except OSError as e:
            raise DiagramLoadError(f"cannot open '{path}': {e}") from e

        with self._lock:
            self.history.reset(buffer)
            self.options.file = path
        logger.debug("opened %s (%d rows)", path, len(buffer.rows))

    def save(self) -> bool:
        """Write the diagram to its path, applying the whitespace policy.

        Returns False if no path is set. Missing parent directories are created.
        """
        path = self.path
        if path is None:
            return False

        with self._lock:
            self.edit(self._apply_whitespace_policy)
            data = self.buffer.to_bytes()
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
            self.history.mark_saved()

        logger.debug("saved %s (%d bytes)", path, len(data))
        return True

    def save_as(self, path: str | Path) -> None:
        self.options.file = Path(path)
        self.save()

    def _apply_whitespace_policy(self, buf: Buffer) -> None:
        if self.options.strip_margin_ws:
            buf.strip_margin_whitespace()
        elif not self.options.keep_trailing_ws:
            buf.strip_trailing_whitespace()

    def rendered(self) -> str:
        """Return the text ``save`` would write, leaving the buffer as is."""
        with self.read() as buf:
            copy = buf.snapshot()
        self._apply_whitespace_policy(copy)
        return copy.render()

    def clipboard_text(self, prefix: str = "") -> str:
        """Render a margin-trimmed copy with every line prefixed, leaving the buffer as is."""
        with self.read() as buf:
            copy = buf.snapshot()
        copy.strip_margin_whitespace()
        return copy.render(prefix).removesuffix("\n")
