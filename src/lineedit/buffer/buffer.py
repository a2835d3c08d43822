"""High-level buffer façade combining document, cursor state, and history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Iterable, Optional

from lineedit.runtime import telemetry

from .document import BufferDocument, Snapshot, StyledLine
from .errors import NothingToDeleteError
from .movement import Direction, move_cursor
from .search import ReplaceOutcome, ReplaceStatus, replace_in_lines
from .state import BufferState, Cursor
from .undo import DEFAULT_UNDO_LIMIT, UndoHistory
from .validation import (
    clamp_cursor,
    ensure_char,
    ensure_insert_position,
    ensure_line_position,
    ensure_not_empty,
)


@dataclass(frozen=True, slots=True)
class BufferView:
    """Read-only state handed to renderers."""

    name: str
    version: int
    lines: Snapshot
    cursor: Cursor
    can_undo: bool
    can_redo: bool


class Buffer:
    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        history: Optional[UndoHistory] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.history = history or UndoHistory()

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        *,
        name: str = "default",
        undo_limit: int = DEFAULT_UNDO_LIMIT,
    ) -> "Buffer":
        return cls(
            name=name,
            document=BufferDocument.from_texts(lines),
            history=UndoHistory(undo_limit),
        )

    @property
    def lines(self) -> Snapshot:
        return self.document.snapshot()

    @property
    def line_count(self) -> int:
        return self.document.line_count

    @property
    def cursor(self) -> Cursor:
        return self.state.cursor

    @property
    def version(self) -> int:
        return self.document.version

    def texts(self) -> tuple[str, ...]:
        """Line texts without styles, as written by savers."""

        return self.document.texts()

    def view(self) -> BufferView:
        return BufferView(
            name=self.name,
            version=self.document.version,
            lines=self.document.snapshot(),
            cursor=self.state.cursor,
            can_undo=self.history.can_undo(),
            can_redo=self.history.can_redo(),
        )

    def load(self, lines: Iterable[str]) -> None:
        """Replace the content with unstyled ``lines`` and forget all history."""

        with telemetry.span(
            "buffer::load", component="buffer", metadata={"buffer": self.name}
        ) as handle:
            self.document.restore([StyledLine(text) for text in lines])
            self.state.reset()
            self.history.clear()
            handle.add_metadata("lines", self.document.line_count)

    def insert_line(self, position: int, line: StyledLine) -> None:
        """Insert ``line`` so that it becomes line number ``position``."""

        index = ensure_insert_position(self.document, position)
        with Transaction(self, "insert_line"):
            self.document.insert_line(index, line)
            self.state.set_cursor(index, len(line.text))

    def delete_line(self, position: int) -> StyledLine:
        index = ensure_line_position(self.document, position)
        with Transaction(self, "delete_line"):
            removed = self.document.remove_line(index)
            self.state.set_cursor(max(0, position - 2), 0)
        return removed

    def insert_char(self, char: str) -> None:
        ensure_not_empty(self.document, "insert a character")
        ensure_char(char)
        line, column = self.state.cursor
        text = self.document.get_line(line).text
        with Transaction(self, "insert_char"):
            self.document.set_text(line, text[:column] + char + text[column:])
            self.state.set_cursor(line, column + 1)

    def delete_char(self) -> None:
        """Backspace: remove the character before the cursor.

        At column 0 the current line is joined onto the previous one.
        """

        ensure_not_empty(self.document, "delete a character")
        line, column = self.state.cursor
        if line == 0 and column == 0:
            raise NothingToDeleteError()
        with Transaction(self, "delete_char"):
            if column > 0:
                text = self.document.get_line(line).text
                self.document.set_text(line, text[: column - 1] + text[column:])
                self.state.set_cursor(line, column - 1)
            else:
                previous = self.document.get_line(line - 1).text
                current = self.document.remove_line(line)
                self.document.set_text(line - 1, previous + current.text)
                self.state.set_cursor(line - 1, len(previous))

    def replace(self, search: str, replacement: str) -> ReplaceOutcome:
        """Replace every occurrence of ``search`` as a single undoable edit."""

        updated, count = replace_in_lines(
            self.document.snapshot(), search, replacement
        )
        with Transaction(self, "replace") as tx:
            if count:
                self.document.restore(updated)
            tx.add_metadata("replacements", count)
        if count:
            return ReplaceOutcome(ReplaceStatus.REPLACED, count)
        return ReplaceOutcome(ReplaceStatus.NO_MATCHES)

    def move(self, direction: Direction | str) -> Cursor:
        target = move_cursor(
            self.document, self.state.cursor, Direction.parse(direction)
        )
        self.state.set_cursor(*target)
        return target

    def undo(self) -> None:
        with telemetry.span(
            "buffer::undo", component="buffer", metadata={"buffer": self.name}
        ):
            restored = self.history.undo(self.document.snapshot())
            self._restore(restored)

    def redo(self) -> None:
        with telemetry.span(
            "buffer::redo", component="buffer", metadata={"buffer": self.name}
        ):
            restored = self.history.redo(self.document.snapshot())
            self._restore(restored)

    def _restore(self, snapshot: Snapshot) -> None:
        self.document.restore(snapshot)
        self.state.set_cursor(*clamp_cursor(self.document, self.state.cursor))


class Transaction(AbstractContextManager["Transaction"]):
    """Wraps one structural edit.

    The pre-edit snapshot is taken on entry. On a clean exit it is pushed to
    the undo stack and the redo stack is cleared.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[telemetry.SpanHandle]] = None
        self._handle: Optional[telemetry.SpanHandle] = None
        self._before: Optional[Snapshot] = None

    def __enter__(self) -> "Transaction":
        self._before = self.buffer.document.snapshot()
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._handle = self._span_cm.__enter__()
        return self

    def add_metadata(self, key: str, value: object) -> None:
        if self._handle is not None:
            self._handle.add_metadata(key, value)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self._before is not None:
            history = self.buffer.history
            history.record(self._before)
            history.clear_redo()
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False


__all__ = ["Buffer", "BufferView", "Transaction"]
