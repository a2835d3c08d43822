from __future__ import annotations

import pytest

from lineedit.buffer import (
    Buffer,
    EmptyDocumentError,
    InvalidPositionError,
    StyledLine,
)


def make_buffer(*texts: str) -> Buffer:
    return Buffer.from_lines(texts)


def test_insert_line_in_the_middle_moves_cursor_to_its_end() -> None:
    buffer = make_buffer("first", "third")

    buffer.insert_line(2, StyledLine("second"))

    assert buffer.texts() == ("first", "second", "third")
    assert buffer.cursor == (1, 6)


def test_insert_line_at_end_plus_one_appends() -> None:
    buffer = make_buffer("a", "b")

    buffer.insert_line(3, StyledLine("c"))

    assert buffer.texts() == ("a", "b", "c")
    assert buffer.cursor == (2, 1)


@pytest.mark.parametrize("position", [0, -1, 4, 10])
def test_insert_line_rejects_out_of_range_positions(position: int) -> None:
    buffer = make_buffer("a", "b")

    with pytest.raises(InvalidPositionError) as excinfo:
        buffer.insert_line(position, StyledLine("x"))

    assert excinfo.value.position == position
    assert excinfo.value.kind == "invalid_position"
    assert buffer.texts() == ("a", "b")
    assert buffer.history.undo_depth == 0


def test_delete_line_puts_cursor_at_start_of_previous_line() -> None:
    buffer = make_buffer("a", "b", "c")

    removed = buffer.delete_line(3)

    assert removed.text == "c"
    assert buffer.texts() == ("a", "b")
    assert buffer.cursor == (1, 0)


def test_delete_first_line_keeps_cursor_on_line_zero() -> None:
    buffer = make_buffer("a", "b", "c")

    buffer.delete_line(1)

    assert buffer.texts() == ("b", "c")
    assert buffer.cursor == (0, 0)


@pytest.mark.parametrize("position", [0, 4])
def test_delete_line_rejects_out_of_range_positions(position: int) -> None:
    buffer = make_buffer("a", "b", "c")

    with pytest.raises(InvalidPositionError):
        buffer.delete_line(position)

    assert buffer.texts() == ("a", "b", "c")
    assert not buffer.history.can_undo()


@pytest.mark.parametrize("position", [1, 2, 3, 4])
def test_insert_then_delete_restores_content(position: int) -> None:
    buffer = make_buffer("one", "two", "three")
    before = buffer.lines

    buffer.insert_line(position, StyledLine("extra", italic=True))
    buffer.delete_line(position)

    assert buffer.lines == before


def test_deleting_the_last_line_leaves_an_empty_document() -> None:
    buffer = make_buffer("only")

    buffer.delete_line(1)

    assert buffer.line_count == 0
    assert buffer.cursor == (0, 0)
    with pytest.raises(EmptyDocumentError):
        buffer.insert_char("x")
    with pytest.raises(EmptyDocumentError):
        buffer.delete_char()
    with pytest.raises(EmptyDocumentError):
        buffer.move("down")
    assert buffer.history.undo_depth == 1


def test_line_styles_survive_character_edits() -> None:
    buffer = Buffer()
    buffer.insert_line(1, StyledLine("title", bold=True, underline=True))

    buffer.insert_char("!")
    buffer.delete_char()
    buffer.delete_char()

    line = buffer.lines[0]
    assert line.text == "titl"
    assert line.styles == ("bold", "underline")


def test_load_resets_cursor_and_history() -> None:
    buffer = make_buffer("a")
    buffer.insert_line(2, StyledLine("b", bold=True))
    buffer.undo()

    buffer.load(["x", "y"])

    assert buffer.texts() == ("x", "y")
    assert buffer.cursor == (0, 0)
    assert not buffer.history.can_undo()
    assert not buffer.history.can_redo()
    assert all(not line.styles for line in buffer.lines)


def test_view_exposes_lines_cursor_and_history_flags() -> None:
    buffer = make_buffer("a")
    buffer.insert_line(1, StyledLine("top", italic=True))

    view = buffer.view()

    assert [line.text for line in view.lines] == ["top", "a"]
    assert view.lines[0].italic is True
    assert view.cursor == (0, 3)
    assert view.can_undo is True
    assert view.can_redo is False
    assert view.version == buffer.version
