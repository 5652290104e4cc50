"""Snapshot-based undo/redo over the live buffer."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ascii_sketch.editor.buffer import Buffer

logger = logging.getLogger(__name__)


class History:
    """Linear undo/redo history of grid snapshots.

    Holds the live buffer so that undo and redo can swap it wholesale, plus
    the snapshot last written to disk for dirty tracking.
    """

    def __init__(self, buffer: Buffer | None = None) -> None:
        self.buffer = buffer if buffer is not None else Buffer()
        self.undo_stack: list[Buffer] = []
        self.redo_stack: list[Buffer] = []
        self.last_save = self.buffer.snapshot()
        self.dirty = False

    def reset(self, buffer: Buffer) -> None:
        """Start a fresh history around ``buffer``, treating it as saved."""
        self.buffer = buffer
        self.undo_stack.clear()
        self.redo_stack.clear()
        self.last_save = buffer.snapshot()
        self.dirty = False

    def mark_saved(self) -> None:
        self.last_save = self.buffer.snapshot()
        self.dirty = False

    def with_snapshot(self, mutator: Callable[[Buffer], None]) -> bool:
        """Run ``mutator`` on the live buffer as one undoable edit.

        Pending edits are discarded first. Returns False, leaving no undo
        entry behind, when the grid came out unchanged. If ``mutator``
        raises, the grid is restored and the exception propagates.
        """
        self.undo_stack.append(self.buffer.snapshot())
        self.buffer.discard()

        try:
            mutator(self.buffer)
        except BaseException:
            self.buffer.rows = self.undo_stack.pop().rows
            self.buffer.discard()
            raise

        if self.undo_stack[-1] == self.buffer:
            self.undo_stack.pop()
            return False

        self.redo_stack.clear()
        self.dirty = True
        logger.debug("recorded edit; %d undo entries", len(self.undo_stack))
        return True

    def _swap(self, source: list[Buffer], target: list[Buffer]) -> bool:
        if not source:
            return False

        previous = self.buffer
        self.buffer = source.pop()
        target.append(previous.snapshot())

        if self.buffer.cursor is None and previous.cursor is not None:
            self.buffer.set_cursor(previous.cursor)

        self.dirty = self.buffer != self.last_save
        return True

    def undo(self) -> bool:
        """Restore the previous snapshot. Returns False if there was nothing to undo."""
        undone = self._swap(self.undo_stack, self.redo_stack)
        if undone:
            logger.debug("undo; %d undo / %d redo entries", len(self.undo_stack), len(self.redo_stack))
        return undone

    def redo(self) -> bool:
        """Reapply the last undone edit. Returns False if there was nothing to redo."""
        redone = self._swap(self.redo_stack, self.undo_stack)
        if redone:
            logger.debug("redo; %d undo / %d redo entries", len(self.undo_stack), len(self.redo_stack))
        return redone
