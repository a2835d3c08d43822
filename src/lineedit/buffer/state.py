"""Cursor state tied to a BufferDocument."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Cursor = Tuple[int, int]  # (line, column), both 0-based


@dataclass(slots=True)
class BufferState:
    cursor: Cursor = (0, 0)

    def set_cursor(self, line: int, column: int) -> None:
        self.cursor = (line, column)

    def reset(self) -> None:
        self.cursor = (0, 0)
