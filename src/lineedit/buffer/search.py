"""Literal search-and-replace over the document's lines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

from .document import StyledLine
from .errors import EmptySearchTermError


class ReplaceStatus(str, Enum):
    NO_MATCHES = "no_matches"
    REPLACED = "replaced"


@dataclass(frozen=True, slots=True)
class ReplaceOutcome:
    status: ReplaceStatus
    count: int = 0

    @property
    def replaced(self) -> bool:
        return self.status is ReplaceStatus.REPLACED


def replace_in_text(text: str, search: str, replacement: str) -> Tuple[str, int]:
    """Replace non-overlapping occurrences of ``search`` left to right.

    Scanning resumes right after each inserted replacement, so text produced
    by a replacement is never matched again.
    """

    if not search:
        raise EmptySearchTermError()
    count = 0
    pos = text.find(search)
    while pos != -1:
        text = text[:pos] + replacement + text[pos + len(search) :]
        count += 1
        pos = text.find(search, pos + len(replacement))
    return text, count


def replace_in_lines(
    lines: Iterable[StyledLine], search: str, replacement: str
) -> Tuple[List[StyledLine], int]:
    """Apply ``replace_in_text`` to every line, keeping style flags."""

    if not search:
        raise EmptySearchTermError()
    updated: List[StyledLine] = []
    total = 0
    for line in lines:
        text, count = replace_in_text(line.text, search, replacement)
        updated.append(line.with_text(text) if count else line)
        total += count
    return updated, total


__all__ = [
    "ReplaceStatus",
    "ReplaceOutcome",
    "replace_in_text",
    "replace_in_lines",
]
