"""Turn buffer views into Rich renderables for the Textual widgets."""

from __future__ import annotations

from typing import Optional

from rich.style import Style
from rich.text import Text

from lineedit.buffer import BufferView, StyledLine

CURSOR_STYLE = Style(reverse=True)
GUTTER_STYLE = Style(dim=True)


def line_style(line: StyledLine) -> Style:
    return Style(bold=line.bold, italic=line.italic, underline=line.underline)


def render_buffer(view: BufferView, *, show_cursor: bool = True) -> Text:
    """Numbered lines with per-line styles and a reverse-video cursor cell."""

    text = Text()
    if not view.lines:
        text.append("(empty document)", style=GUTTER_STYLE)
        return text

    width = len(str(len(view.lines)))
    cursor_line, cursor_column = view.cursor
    for index, line in enumerate(view.lines):
        if index:
            text.append("\n")
        text.append(f"{index + 1:>{width}}: ", style=GUTTER_STYLE)
        start = len(text)
        # A trailing space gives an end-of-line cursor something to sit on.
        body = line.text + " " if show_cursor and index == cursor_line else line.text
        text.append(body, style=line_style(line))
        if show_cursor and index == cursor_line:
            offset = start + min(cursor_column, len(line.text))
            text.stylize(CURSOR_STYLE, offset, offset + 1)
    return text


def status_text(view: BufferView, *, path: Optional[str] = None) -> str:
    line, column = view.cursor
    parts = [f"Cursor at line {line + 1}, column {column + 1}"]
    if path:
        parts.insert(0, path)
    if line < len(view.lines) and view.lines[line].styles:
        parts.append("+".join(view.lines[line].styles))
    flags = []
    if view.can_undo:
        flags.append("undo")
    if view.can_redo:
        flags.append("redo")
    if flags:
        parts.append("/".join(flags))
    return " | ".join(parts)


__all__ = ["render_buffer", "status_text", "line_style"]
