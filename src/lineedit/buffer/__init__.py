"""Line buffer, cursor model, and undo/redo history."""

from .buffer import Buffer, BufferView, Transaction
from .document import BufferDocument, Snapshot, StyledLine
from .errors import (
    EditorError,
    EmptyDocumentError,
    EmptySearchTermError,
    InvalidPositionError,
    NothingToDeleteError,
    NothingToRedoError,
    NothingToUndoError,
)
from .movement import Direction, move_cursor
from .search import ReplaceOutcome, ReplaceStatus, replace_in_lines, replace_in_text
from .state import BufferState, Cursor
from .undo import DEFAULT_UNDO_LIMIT, UndoHistory
from .validation import clamp_cursor

__all__ = [
    "Buffer",
    "BufferView",
    "Transaction",
    "BufferDocument",
    "BufferState",
    "Cursor",
    "Snapshot",
    "StyledLine",
    "Direction",
    "move_cursor",
    "ReplaceOutcome",
    "ReplaceStatus",
    "replace_in_lines",
    "replace_in_text",
    "UndoHistory",
    "DEFAULT_UNDO_LIMIT",
    "clamp_cursor",
    "EditorError",
    "EmptyDocumentError",
    "EmptySearchTermError",
    "InvalidPositionError",
    "NothingToDeleteError",
    "NothingToRedoError",
    "NothingToUndoError",
]
