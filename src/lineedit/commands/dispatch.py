"""Dispatch layer between hosts and the buffer core.

Every command runs to completion and returns a ``CommandResult``. Errors from
the core, from argument validation, and from file I/O are reported as failed
results so the host loop can keep going.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from lineedit import storage
from lineedit.buffer import Buffer, Direction, EditorError, StyledLine
from lineedit.runtime import telemetry

from .base import CommandBus, CommandResult

LOGGER_NAME = "lineedit.commands"


class CommandDispatcher:
    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        path: Optional[str] = None,
        bus: Optional[CommandBus] = None,
    ) -> None:
        self.buffer = buffer or Buffer()
        self.path = path
        self.bus = bus or CommandBus()
        self.quit_requested = False

    def insert_line(
        self,
        position: int,
        text: str,
        *,
        bold: bool = False,
        italic: bool = False,
        underline: bool = False,
    ) -> CommandResult:
        line = StyledLine(text, bold=bold, italic=italic, underline=underline)
        return self._run(
            "insert_line",
            lambda: self.buffer.insert_line(position, line),
            message=f"Inserted line {position}",
            data={"position": position},
        )

    def delete_line(self, position: int) -> CommandResult:
        return self._run(
            "delete_line",
            lambda: self.buffer.delete_line(position),
            message=f"Deleted line {position}",
            data={"position": position},
        )

    def replace(self, search: str, replacement: str) -> CommandResult:
        outcome = None

        def apply() -> None:
            nonlocal outcome
            outcome = self.buffer.replace(search, replacement)

        result = self._run("replace", apply, data={"search": search})
        if not result.ok or outcome is None:
            return result
        if outcome.replaced:
            result.message = (
                f"All instances of '{search}' have been replaced with "
                f"'{replacement}' ({outcome.count})."
            )
        else:
            result.status = outcome.status.value
            result.message = f"No instances of '{search}' were found in the document."
        return result

    def undo(self) -> CommandResult:
        return self._run("undo", self.buffer.undo, message="Undone")

    def redo(self) -> CommandResult:
        return self._run("redo", self.buffer.redo, message="Redone")

    def move(self, direction: Direction | str) -> CommandResult:
        return self._run(
            "move",
            lambda: self.buffer.move(direction),
            data={"direction": getattr(direction, "value", direction)},
        )

    def insert_char(self, char: str) -> CommandResult:
        return self._run("insert_char", lambda: self.buffer.insert_char(char))

    def delete_char(self) -> CommandResult:
        return self._run("delete_char", self.buffer.delete_char)

    def save(self, name: Optional[str] = None) -> CommandResult:
        target = name or self.path
        if not target:
            return self._fail("save", "no_path", "No file name to save to")

        def apply() -> None:
            storage.save_document(self.buffer, target)
            self.path = target
            self.bus.emit("document.saved", {"path": target})

        return self._run("save", apply, message=f"Saved {target}")

    def load(self, name: str, *, create: bool = False) -> CommandResult:
        def apply() -> None:
            storage.load_into(self.buffer, name, create=create)
            self.path = name
            self.bus.emit(
                "document.loaded", {"path": name, "lines": self.buffer.line_count}
            )

        return self._run("load", apply, message=f"Opened {name}")

    def quit(self) -> CommandResult:
        self.quit_requested = True
        self.bus.emit("editor.quit", {"path": self.path})
        telemetry.record_event("command.quit", level="debug", logger_name=LOGGER_NAME)
        return CommandResult(ok=True, status="quit", message="Bye")

    def _run(
        self,
        name: str,
        action: Callable[[], Any],
        *,
        message: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
    ) -> CommandResult:
        try:
            action()
        except EditorError as exc:
            return self._fail(name, exc.kind, str(exc))
        except ValueError as exc:
            return self._fail(name, "invalid_argument", str(exc))
        except OSError as exc:
            return self._fail(name, "io_error", str(exc))

        payload = {"command": name, "cursor": self.buffer.cursor, **(data or {})}
        telemetry.record_event(
            f"command.{name}", level="debug", data=payload, logger_name=LOGGER_NAME
        )
        self.bus.emit("command.ok", payload)
        return CommandResult(ok=True, message=message)

    def _fail(self, name: str, status: str, message: str) -> CommandResult:
        telemetry.record_event(
            f"command.{name}.failed",
            level="warning",
            data={"status": status, "message": message},
            logger_name=LOGGER_NAME,
        )
        self.bus.emit(
            "command.error", {"command": name, "status": status, "message": message}
        )
        return CommandResult.failure(status, message)


__all__ = ["CommandDispatcher"]
