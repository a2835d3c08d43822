"""Line storage for the editing core."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Sequence, Tuple


@dataclass(frozen=True, slots=True)
class StyledLine:
    """A line of text plus per-line style flags.

    Flags are fixed when the line is inserted; text edits keep them as-is.
    """

    text: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False

    def with_text(self, text: str) -> "StyledLine":
        return replace(self, text=text)

    @property
    def styles(self) -> Tuple[str, ...]:
        names = []
        if self.bold:
            names.append("bold")
        if self.italic:
            names.append("italic")
        if self.underline:
            names.append("underline")
        return tuple(names)


Snapshot = Tuple[StyledLine, ...]


@dataclass(slots=True)
class BufferDocument:
    """Ordered, mutable list of styled lines.

    Unlike a plain text buffer the document may hold zero lines; deleting the
    last line leaves it empty.
    """

    _lines: List[StyledLine] = field(default_factory=list)
    version: int = 0

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> "BufferDocument":
        return cls(_lines=[StyledLine(text) for text in texts])

    def snapshot(self) -> Snapshot:
        """Return an independent, immutable copy of the current lines."""

        return tuple(self._lines)

    def texts(self) -> Tuple[str, ...]:
        return tuple(line.text for line in self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get_line(self, index: int) -> StyledLine:
        return self._lines[index]

    def line_length(self, index: int) -> int:
        return len(self._lines[index].text)

    def insert_line(self, index: int, line: StyledLine) -> None:
        self._lines.insert(index, line)
        self._touch()

    def remove_line(self, index: int) -> StyledLine:
        removed = self._lines.pop(index)
        self._touch()
        return removed

    def set_text(self, index: int, text: str) -> None:
        self._lines[index] = self._lines[index].with_text(text)
        self._touch()

    def restore(self, snapshot: Sequence[StyledLine]) -> None:
        """Swap the whole line list for ``snapshot``."""

        self._lines = list(snapshot)
        self._touch()

    def _touch(self) -> None:
        self.version += 1


__all__ = ["StyledLine", "Snapshot", "BufferDocument"]
