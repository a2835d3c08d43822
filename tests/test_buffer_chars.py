from __future__ import annotations

import pytest

from lineedit.buffer import Buffer, NothingToDeleteError, StyledLine


def make_buffer(*texts: str, cursor: tuple[int, int] = (0, 0)) -> Buffer:
    buffer = Buffer.from_lines(texts)
    buffer.state.set_cursor(*cursor)
    return buffer


def test_insert_char_at_cursor_advances_column() -> None:
    buffer = make_buffer("ac", cursor=(0, 1))

    buffer.insert_char("b")

    assert buffer.texts() == ("abc",)
    assert buffer.cursor == (0, 2)


def test_insert_char_at_end_of_line_appends() -> None:
    buffer = make_buffer("ab", cursor=(0, 2))

    buffer.insert_char("c")

    assert buffer.texts() == ("abc",)
    assert buffer.cursor == (0, 3)


@pytest.mark.parametrize("char", ["", "ab", "\n", "\r"])
def test_insert_char_rejects_anything_but_one_character(char: str) -> None:
    buffer = make_buffer("ab", cursor=(0, 1))

    with pytest.raises(ValueError):
        buffer.insert_char(char)

    assert buffer.texts() == ("ab",)
    assert buffer.history.undo_depth == 0


def test_backspacing_a_whole_line() -> None:
    buffer = make_buffer("hello", cursor=(0, 5))

    for _ in range(4):
        buffer.delete_char()
    assert buffer.texts() == ("h",)
    assert buffer.cursor == (0, 1)

    buffer.delete_char()
    assert buffer.texts() == ("",)
    assert buffer.cursor == (0, 0)

    with pytest.raises(NothingToDeleteError):
        buffer.delete_char()
    assert buffer.texts() == ("",)
    assert buffer.history.undo_depth == 5


def test_delete_char_at_column_zero_joins_with_previous_line() -> None:
    buffer = make_buffer("ab", "cd", "ef", cursor=(1, 0))

    buffer.delete_char()

    assert buffer.texts() == ("abcd", "ef")
    assert buffer.cursor == (0, 2)


def test_delete_char_joining_keeps_previous_line_style() -> None:
    buffer = make_buffer("tail")
    buffer.insert_line(1, StyledLine("head", bold=True))
    buffer.state.set_cursor(1, 0)

    buffer.delete_char()

    assert buffer.texts() == ("headtail",)
    assert buffer.lines[0].bold is True
    assert buffer.cursor == (0, 4)


def test_failed_delete_char_keeps_redo_history() -> None:
    buffer = make_buffer("ab", cursor=(0, 2))
    buffer.delete_char()
    buffer.undo()
    buffer.state.set_cursor(0, 0)

    with pytest.raises(NothingToDeleteError):
        buffer.delete_char()

    assert buffer.history.can_redo()
