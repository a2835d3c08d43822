"""Plain-text loader and saver for buffers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from lineedit.buffer import Buffer
from lineedit.buffer.undo import DEFAULT_UNDO_LIMIT
from lineedit.runtime import telemetry

PathLike = Union[str, "os.PathLike[str]"]


def read_lines(path: PathLike) -> List[str]:
    """Read ``path`` as UTF-8 and return its rows without line terminators.

    A trailing newline does not produce an extra empty row, and an empty file
    yields no rows at all.
    """

    with open(path, "r", encoding="utf-8") as handle:
        content = handle.read()
    if not content:
        return []
    rows = content.split("\n")
    if rows[-1] == "":
        rows.pop()
    return rows


def write_lines(path: PathLike, lines: Iterable[str]) -> None:
    """Write one row per line, each terminated by ``\\n``.

    The data goes to a temporary file next to ``path`` which is then renamed
    over the target, so a failed save never truncates an existing file.
    """

    target = Path(path)
    content = "".join(f"{line}\n" for line in lines)
    temp_name = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as temp_file:
            temp_name = temp_file.name
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_name, target)
    except BaseException:
        if temp_name is not None and os.path.exists(temp_name):
            os.remove(temp_name)
        raise


def _read_or_create(
    path: PathLike, create: bool, handle: telemetry.SpanHandle
) -> List[str]:
    try:
        return read_lines(path)
    except FileNotFoundError:
        if not create:
            raise
    write_lines(path, [])
    handle.add_metadata("created", True)
    return []


def open_document(
    path: PathLike,
    *,
    create: bool = False,
    undo_limit: int = DEFAULT_UNDO_LIMIT,
) -> Buffer:
    """Load ``path`` into a new Buffer named after the file.

    With ``create`` a missing file is written empty and an empty buffer is
    returned; otherwise ``FileNotFoundError`` propagates.
    """

    name = os.fspath(path)
    with telemetry.span(
        "storage::open", component="storage", metadata={"path": name}
    ) as handle:
        rows = _read_or_create(path, create, handle)
        return Buffer.from_lines(rows, name=name, undo_limit=undo_limit)


def load_into(buffer: Buffer, path: PathLike, *, create: bool = False) -> None:
    """Replace ``buffer`` content with the rows of ``path``.

    ``create`` behaves as in ``open_document``.
    """

    with telemetry.span(
        "storage::load", component="storage", metadata={"path": os.fspath(path)}
    ) as handle:
        buffer.load(_read_or_create(path, create, handle))
        buffer.name = os.fspath(path)


def save_document(buffer: Buffer, path: PathLike) -> None:
    with telemetry.span(
        "storage::save", component="storage", metadata={"path": os.fspath(path)}
    ) as handle:
        lines = buffer.texts()
        write_lines(path, lines)
        handle.add_metadata("lines", len(lines))


__all__ = [
    "read_lines",
    "write_lines",
    "open_document",
    "load_into",
    "save_document",
]
