"""Recoverable errors raised by the editing core."""

from __future__ import annotations


class EditorError(RuntimeError):
    """Base class for every error the buffer reports to its caller.

    ``kind`` is a stable identifier the command layer surfaces as a status.
    """

    kind = "editor_error"


class InvalidPositionError(EditorError):
    """Raised when a 1-based line number falls outside the document."""

    kind = "invalid_position"

    def __init__(self, position: int, *, line_count: int) -> None:
        super().__init__(
            f"Invalid line number {position} (document has {line_count} lines)"
        )
        self.position = position
        self.line_count = line_count


class NothingToDeleteError(EditorError):
    kind = "nothing_to_delete"

    def __init__(self) -> None:
        super().__init__("Nothing to delete")


class EmptySearchTermError(EditorError):
    kind = "empty_search_term"

    def __init__(self) -> None:
        super().__init__("Search text cannot be empty")


class NothingToUndoError(EditorError):
    kind = "nothing_to_undo"

    def __init__(self) -> None:
        super().__init__("Nothing to undo")


class NothingToRedoError(EditorError):
    kind = "nothing_to_redo"

    def __init__(self) -> None:
        super().__init__("Nothing to redo")


class EmptyDocumentError(EditorError):
    """Raised by cursor-dependent operations when the document has no lines."""

    kind = "empty_document"

    def __init__(self, operation: str) -> None:
        super().__init__(f"Cannot {operation}: the document is empty")
        self.operation = operation


__all__ = [
    "EditorError",
    "InvalidPositionError",
    "NothingToDeleteError",
    "EmptySearchTermError",
    "NothingToUndoError",
    "NothingToRedoError",
    "EmptyDocumentError",
]
