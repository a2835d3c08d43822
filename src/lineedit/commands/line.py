"""Parse typed command lines and route them to a ``CommandDispatcher``.

Examples::

    insert 2 "some text" +bold +underline
    delete 3
    replace old new
    move up
    char x
"""

from __future__ import annotations

import shlex
from functools import partial
from typing import Callable, Dict, List

from .base import CommandResult
from .dispatch import CommandDispatcher

CommandHandler = Callable[[CommandDispatcher, List[str]], CommandResult]

_STYLE_FLAGS = {
    "+bold": "bold",
    "+b": "bold",
    "+italic": "italic",
    "+i": "italic",
    "+underline": "underline",
    "+u": "underline",
}


def submit_command_line(dispatcher: CommandDispatcher, text: str) -> CommandResult:
    try:
        parts = shlex.split(text)
    except ValueError as exc:
        return CommandResult.failure("parse_error", str(exc))
    if not parts:
        return CommandResult(ok=True, status="command_empty")
    command, args = parts[0].lower(), parts[1:]
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return CommandResult.failure(
            "unknown_command", f"Unknown command '{command}'"
        )
    return handler(dispatcher, args)


def _usage(text: str) -> CommandResult:
    return CommandResult.failure("usage", f"Usage: {text}")


def _bad_position(raw: str) -> CommandResult:
    return CommandResult.failure("invalid_argument", f"Not a line number: {raw}")


def _parse_position(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def _handle_insert(dispatcher: CommandDispatcher, args: List[str]) -> CommandResult:
    if not args:
        return _usage("insert <line> [text] [+bold] [+italic] [+underline]")
    position = _parse_position(args[0])
    if position is None:
        return _bad_position(args[0])
    styles = {"bold": False, "italic": False, "underline": False}
    words: List[str] = []
    for token in args[1:]:
        flag = _STYLE_FLAGS.get(token.lower())
        if flag:
            styles[flag] = True
        else:
            words.append(token)
    return dispatcher.insert_line(position, " ".join(words), **styles)


def _handle_delete(dispatcher: CommandDispatcher, args: List[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("delete <line>")
    position = _parse_position(args[0])
    if position is None:
        return _bad_position(args[0])
    return dispatcher.delete_line(position)


def _handle_replace(dispatcher: CommandDispatcher, args: List[str]) -> CommandResult:
    if len(args) not in (1, 2):
        return _usage("replace <search> [replacement]")
    replacement = args[1] if len(args) == 2 else ""
    return dispatcher.replace(args[0], replacement)


def _handle_move(dispatcher: CommandDispatcher, args: List[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("move <up|down|left|right>")
    return dispatcher.move(args[0])


def _handle_char(dispatcher: CommandDispatcher, args: List[str]) -> CommandResult:
    if len(args) != 1:
        return _usage("char <character>")
    return dispatcher.insert_char(args[0])


def _handle_open(dispatcher: CommandDispatcher, args: List[str]) -> CommandResult:
    create = "--create" in args
    names = [arg for arg in args if arg != "--create"]
    if len(names) != 1:
        return _usage("open <file> [--create]")
    return dispatcher.load(names[0], create=create)


def _handle_save(dispatcher: CommandDispatcher, args: List[str]) -> CommandResult:
    if len(args) > 1:
        return _usage("save [file]")
    return dispatcher.save(args[0] if args else None)


def _no_args(
    method: Callable[[CommandDispatcher], CommandResult],
    usage: str,
    dispatcher: CommandDispatcher,
    args: List[str],
) -> CommandResult:
    if args:
        return _usage(usage)
    return method(dispatcher)


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "insert": _handle_insert,
    "i": _handle_insert,
    "delete": _handle_delete,
    "d": _handle_delete,
    "replace": _handle_replace,
    "s": _handle_replace,
    "undo": partial(_no_args, CommandDispatcher.undo, "undo"),
    "u": partial(_no_args, CommandDispatcher.undo, "undo"),
    "redo": partial(_no_args, CommandDispatcher.redo, "redo"),
    "r": partial(_no_args, CommandDispatcher.redo, "redo"),
    "move": _handle_move,
    "m": _handle_move,
    "char": _handle_char,
    "c": _handle_char,
    "backspace": partial(_no_args, CommandDispatcher.delete_char, "backspace"),
    "x": partial(_no_args, CommandDispatcher.delete_char, "backspace"),
    "save": _handle_save,
    "w": _handle_save,
    "open": _handle_open,
    "e": _handle_open,
    "quit": partial(_no_args, CommandDispatcher.quit, "quit"),
    "q": partial(_no_args, CommandDispatcher.quit, "quit"),
}


__all__ = ["submit_command_line"]
