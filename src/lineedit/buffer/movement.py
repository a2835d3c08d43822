"""Cursor movement rules."""

from __future__ import annotations

from enum import Enum

from .document import BufferDocument
from .errors import EmptyDocumentError
from .state import Cursor


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: "str | Direction") -> "Direction":
        """Accept a direction name or one of the ``w``/``a``/``s``/``d`` keys."""

        if isinstance(value, Direction):
            return value
        key = value.strip().lower()
        if key in _KEY_ALIASES:
            return _KEY_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown direction '{value}'") from None


_KEY_ALIASES = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


def move_cursor(
    document: BufferDocument, cursor: Cursor, direction: Direction
) -> Cursor:
    """Return the cursor after one step in ``direction``."""

    if document.is_empty:
        raise EmptyDocumentError("move the cursor")
    line, column = cursor
    last_line = document.line_count - 1

    if direction is Direction.UP:
        line = max(0, line - 1)
        return (line, min(column, document.line_length(line)))

    if direction is Direction.DOWN:
        line = min(last_line, line + 1)
        return (line, min(column, document.line_length(line)))

    if direction is Direction.LEFT:
        if column > 0:
            return (line, column - 1)
        if line > 0:
            return (line - 1, document.line_length(line - 1))
        return (line, column)

    if column < document.line_length(line):
        return (line, column + 1)
    if line < last_line:
        return (line + 1, 0)
    return (line, column)


__all__ = ["Direction", "move_cursor"]
