"""Validation helpers shared across buffer services."""

from __future__ import annotations

from .document import BufferDocument
from .errors import EmptyDocumentError, InvalidPositionError
from .state import Cursor


def ensure_insert_position(document: BufferDocument, position: int) -> int:
    """Return the 0-based index for inserting at 1-based ``position``."""

    if position < 1 or position > document.line_count + 1:
        raise InvalidPositionError(position, line_count=document.line_count)
    return position - 1


def ensure_line_position(document: BufferDocument, position: int) -> int:
    """Return the 0-based index of the existing line at 1-based ``position``."""

    if position < 1 or position > document.line_count:
        raise InvalidPositionError(position, line_count=document.line_count)
    return position - 1


def ensure_not_empty(document: BufferDocument, operation: str) -> None:
    if document.is_empty:
        raise EmptyDocumentError(operation)


def ensure_char(char: str) -> str:
    if len(char) != 1:
        raise ValueError(f"Expected a single character, got {char!r}")
    if char in "\r\n":
        raise ValueError("Line breaks cannot be inserted as characters")
    return char


def clamp_cursor(document: BufferDocument, cursor: Cursor) -> Cursor:
    """Pull ``cursor`` back inside the document, keeping it when already valid."""

    if document.is_empty:
        return (0, 0)
    line, column = cursor
    line = max(0, min(line, document.line_count - 1))
    column = max(0, min(column, document.line_length(line)))
    return (line, column)


__all__ = [
    "ensure_insert_position",
    "ensure_line_position",
    "ensure_not_empty",
    "ensure_char",
    "clamp_cursor",
]
