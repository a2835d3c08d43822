"""Adapter that maps Textual key presses and command lines onto the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from lineedit.buffer import BufferView, Direction
from lineedit.commands import CommandDispatcher, CommandResult, submit_command_line


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferView], None]
    show_message: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


_MOVE_KEYS: Dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


class TextualEditorAdapter:
    """Bridges a CommandDispatcher and its bus to a Textual-friendly surface."""

    def __init__(self, dispatcher: CommandDispatcher, hooks: TextualUIHooks) -> None:
        self.dispatcher = dispatcher
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self, key: str, *, text: Optional[str] = None
    ) -> Optional[CommandResult]:
        """Run the editing command bound to ``key``; ``None`` when unbound."""

        self.hooks.log(f"key -> {key!r} text={text!r}")
        result = self._dispatch_key(key, text)
        if result is not None:
            self._after_result(result)
        return result

    def submit_command(self, text: str) -> CommandResult:
        self.hooks.log(f"command -> {text!r}")
        result = submit_command_line(self.dispatcher, text)
        self._after_result(result)
        return result

    @property
    def quit_requested(self) -> bool:
        return self.dispatcher.quit_requested

    def refresh(self) -> None:
        self.hooks.update_buffer(self.dispatcher.buffer.view())

    def _dispatch_key(self, key: str, text: Optional[str]) -> Optional[CommandResult]:
        dispatcher = self.dispatcher
        if key in _MOVE_KEYS:
            return dispatcher.move(_MOVE_KEYS[key])
        if key == "backspace":
            return dispatcher.delete_char()
        if key == "ctrl+z":
            return dispatcher.undo()
        if key == "ctrl+y":
            return dispatcher.redo()
        if key == "ctrl+s":
            return dispatcher.save()
        if text and len(text) == 1 and text.isprintable():
            return dispatcher.insert_char(text)
        return None

    def _after_result(self, result: CommandResult) -> None:
        self.hooks.log(f"result <- ok={result.ok} status={result.status}")
        if result.message:
            self.hooks.show_message(result.message)
        self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.dispatcher.bus
        for event in (
            "command.ok",
            "command.error",
            "document.saved",
            "document.loaded",
            "editor.quit",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.log(f"event -> {name} {payload!r}")
        self.hooks.handle_event(name, payload)


__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
