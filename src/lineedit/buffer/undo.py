"""Snapshot-based undo/redo history."""

from __future__ import annotations

from collections import deque
from typing import Deque, List

from .document import Snapshot
from .errors import NothingToRedoError, NothingToUndoError

DEFAULT_UNDO_LIMIT = 10


class UndoHistory:
    """Bounded undo stack plus a redo stack that any new edit invalidates.

    Entries are whole-document snapshots. When the undo stack grows past
    ``limit`` the oldest snapshot is dropped, so the most recent states are
    always kept.
    """

    def __init__(self, limit: int = DEFAULT_UNDO_LIMIT) -> None:
        if limit < 1:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._undo: Deque[Snapshot] = deque(maxlen=limit)
        self._redo: List[Snapshot] = []

    def record(self, snapshot: Snapshot) -> None:
        self._undo.append(snapshot)

    def undo(self, current: Snapshot) -> Snapshot:
        """Stash ``current`` for redo and return the state to restore."""

        if not self._undo:
            raise NothingToUndoError()
        self._redo.append(current)
        return self._undo.pop()

    def redo(self, current: Snapshot) -> Snapshot:
        if not self._redo:
            raise NothingToRedoError()
        self._undo.append(current)
        return self._redo.pop()

    def clear_redo(self) -> None:
        self._redo.clear()

    def clear(self) -> None:
        self._undo.clear()
        self._redo.clear()

    def can_undo(self) -> bool:
        return bool(self._undo)

    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)


__all__ = ["UndoHistory", "DEFAULT_UNDO_LIMIT"]
