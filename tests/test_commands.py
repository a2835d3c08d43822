from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from lineedit.buffer import Buffer, Direction
from lineedit.commands import CommandBus, CommandDispatcher, submit_command_line


def make_dispatcher(*texts: str, path: str | None = None) -> CommandDispatcher:
    return CommandDispatcher(Buffer.from_lines(texts), path=path)


def collect(bus: CommandBus, *events: str) -> List[tuple[str, object | None]]:
    seen: List[tuple[str, object | None]] = []
    for event in events:
        bus.subscribe(event, lambda payload, name=event: seen.append((name, payload)))
    return seen


def test_successful_command_emits_ok_event() -> None:
    dispatcher = make_dispatcher("a")
    seen = collect(dispatcher.bus, "command.ok", "command.error")

    result = dispatcher.insert_line(2, "b", italic=True)

    assert result.ok
    assert result.status == "ok"
    assert dispatcher.buffer.lines[1].italic is True
    assert seen == [
        ("command.ok", {"command": "insert_line", "cursor": (1, 1), "position": 2})
    ]


@pytest.mark.parametrize(
    ("call", "status"),
    [
        (lambda d: d.insert_line(0, "x"), "invalid_position"),
        (lambda d: d.delete_line(5), "invalid_position"),
        (lambda d: d.undo(), "nothing_to_undo"),
        (lambda d: d.redo(), "nothing_to_redo"),
        (lambda d: d.replace("", "x"), "empty_search_term"),
        (lambda d: d.delete_char(), "nothing_to_delete"),
        (lambda d: d.insert_char("xy"), "invalid_argument"),
        (lambda d: d.move("sideways"), "invalid_argument"),
    ],
)
def test_core_errors_become_failed_results(call, status: str) -> None:
    dispatcher = make_dispatcher("abc")
    seen = collect(dispatcher.bus, "command.error")

    result = call(dispatcher)

    assert not result.ok
    assert result.status == status
    assert result.message
    assert len(seen) == 1
    assert seen[0][1]["status"] == status
    assert dispatcher.buffer.texts() == ("abc",)


def test_empty_document_is_reported() -> None:
    dispatcher = make_dispatcher()

    result = dispatcher.insert_char("x")

    assert result.status == "empty_document"


def test_replace_reports_counts_and_no_matches() -> None:
    dispatcher = make_dispatcher("abc", "abcabc")

    replaced = dispatcher.replace("abc", "X")
    missing = dispatcher.replace("zzz", "y")

    assert replaced.ok and replaced.status == "ok"
    assert "(3)" in replaced.message
    assert missing.ok
    assert missing.status == "no_matches"
    assert missing.message == "No instances of 'zzz' were found in the document."
    assert dispatcher.buffer.texts() == ("X", "XX")


def test_move_accepts_direction_enum() -> None:
    dispatcher = make_dispatcher("ab", "cd")

    assert dispatcher.move(Direction.DOWN).ok
    assert dispatcher.buffer.cursor == (1, 0)


def test_quit_sets_flag_and_emits_event() -> None:
    dispatcher = make_dispatcher(path="notes.txt")
    seen = collect(dispatcher.bus, "editor.quit")

    result = dispatcher.quit()

    assert result.ok and result.status == "quit"
    assert dispatcher.quit_requested
    assert seen == [("editor.quit", {"path": "notes.txt"})]


def test_save_without_path_fails() -> None:
    dispatcher = make_dispatcher("a")

    result = dispatcher.save()

    assert not result.ok
    assert result.status == "no_path"


def test_save_then_load_round_trips_text(tmp_path: Path) -> None:
    target = tmp_path / "doc.txt"
    dispatcher = make_dispatcher("first", "second")
    seen = collect(dispatcher.bus, "document.saved", "document.loaded")

    assert dispatcher.save(str(target)).ok
    assert target.read_text(encoding="utf-8") == "first\nsecond\n"
    assert dispatcher.path == str(target)

    other = CommandDispatcher()
    assert other.load(str(target)).ok
    assert other.buffer.texts() == ("first", "second")
    assert not other.buffer.history.can_undo()
    assert seen == [("document.saved", {"path": str(target)})]


def test_load_missing_file_is_an_io_error(tmp_path: Path) -> None:
    dispatcher = make_dispatcher("keep")

    result = dispatcher.load(str(tmp_path / "missing.txt"))

    assert not result.ok
    assert result.status == "io_error"
    assert dispatcher.buffer.texts() == ("keep",)


def test_load_with_create_writes_empty_file(tmp_path: Path) -> None:
    target = tmp_path / "new.txt"
    dispatcher = make_dispatcher("old")
    seen = collect(dispatcher.bus, "document.loaded")

    result = dispatcher.load(str(target), create=True)

    assert result.ok
    assert target.exists()
    assert dispatcher.buffer.line_count == 0
    assert dispatcher.path == str(target)
    assert seen == [("document.loaded", {"path": str(target), "lines": 0})]


def test_command_line_insert_with_styles() -> None:
    dispatcher = make_dispatcher()

    result = submit_command_line(dispatcher, 'insert 1 "hello world" +bold +u')

    assert result.ok
    line = dispatcher.buffer.lines[0]
    assert line.text == "hello world"
    assert line.styles == ("bold", "underline")


def test_command_line_aliases_drive_editing() -> None:
    dispatcher = make_dispatcher("foo bar")

    assert submit_command_line(dispatcher, "s foo").ok
    assert dispatcher.buffer.texts() == (" bar",)
    assert submit_command_line(dispatcher, "u").ok
    assert submit_command_line(dispatcher, "m right").ok
    assert submit_command_line(dispatcher, "c X").ok
    assert dispatcher.buffer.texts() == ("fXoo bar",)
    assert submit_command_line(dispatcher, "x").ok
    assert dispatcher.buffer.texts() == ("foo bar",)


@pytest.mark.parametrize(
    ("text", "status"),
    [
        ("delete two", "invalid_argument"),
        ("insert x hello", "invalid_argument"),
        ("frobnicate", "unknown_command"),
        ('insert 1 "unterminated', "parse_error"),
        ("delete", "usage"),
        ("undo now", "usage"),
        ("move", "usage"),
    ],
)
def test_command_line_reports_bad_input(text: str, status: str) -> None:
    dispatcher = make_dispatcher("a")

    result = submit_command_line(dispatcher, text)

    assert not result.ok
    assert result.status == status
    assert dispatcher.buffer.texts() == ("a",)


def test_blank_command_line_is_ignored() -> None:
    dispatcher = make_dispatcher("a")

    result = submit_command_line(dispatcher, "   ")

    assert result.ok
    assert result.status == "command_empty"


def test_command_line_quit() -> None:
    dispatcher = make_dispatcher()

    result = submit_command_line(dispatcher, "q")

    assert result.status == "quit"
    assert dispatcher.quit_requested
