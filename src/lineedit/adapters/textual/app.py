"""Executable Textual app hosting the line editor."""

from __future__ import annotations

import argparse
import os
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import VerticalScroll
    from textual.widgets import Footer, Header, Input, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use lineedit.adapters.textual.app"
    ) from exc

from lineedit import storage
from lineedit.buffer import Buffer, BufferView, UndoHistory
from lineedit.buffer.undo import DEFAULT_UNDO_LIMIT
from lineedit.commands import CommandDispatcher
from lineedit.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks
from .render import render_buffer, status_text


def create_dispatcher(
    path: Optional[str],
    *,
    create: bool = False,
    undo_limit: int = DEFAULT_UNDO_LIMIT,
) -> CommandDispatcher:
    """Open ``path`` (or an empty scratch buffer) behind a dispatcher."""

    if path is None:
        return CommandDispatcher(Buffer(history=UndoHistory(undo_limit)))
    buffer = storage.open_document(path, create=create, undo_limit=undo_limit)
    return CommandDispatcher(buffer, path=path)


class BufferPane(Static, can_focus=True):
    """Focusable pane that shows the document."""


class LineEditApp(App[None]):
    """Minimal Textual UI around the editing core."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-area {
		height: 1fr;
		border: round $accent;
	}

	#buffer-view {
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#message-line {
		height: 1;
		padding: 0 1;
	}

	#command-line {
		height: 3;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, dispatcher: CommandDispatcher) -> None:
        super().__init__()
        self.dispatcher = dispatcher
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: BufferPane | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None
        self._command_input: Input | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with VerticalScroll(id="buffer-area"):
            self._buffer_widget = BufferPane("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._message_widget = Static("", id="message-line")
        self._command_input = Input(
            placeholder=": insert 1 text +bold | delete 1 | replace a b | save",
            id="command-line",
        )
        yield self._status_widget
        yield self._message_widget
        yield self._command_input
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            show_message=self._show_message,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.dispatcher, hooks)
        if self._buffer_widget:
            self._buffer_widget.focus()

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or not self._buffer_widget:
            return
        if not self._buffer_widget.has_focus:
            if event.key == "escape" and self._command_input is not None:
                self._command_input.value = ""
                self._buffer_widget.focus()
                event.stop()
            return
        if event.character == ":" and self._command_input is not None:
            self._command_input.focus()
            event.stop()
            return
        result = self.adapter.handle_textual_key(event.key, text=event.character)
        if result is not None:
            event.stop()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.adapter:
            return
        self.adapter.submit_command(event.value)
        event.input.value = ""
        if self.adapter.quit_requested:
            self.exit()
            return
        if self._buffer_widget:
            self._buffer_widget.focus()

    def _update_buffer(self, view: BufferView) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_buffer(view))
        if self._status_widget:
            self._status_widget.update(status_text(view, path=self.dispatcher.path))
        self.sub_title = self.dispatcher.path or "scratch"

    def _show_message(self, message: str) -> None:
        if self._message_widget:
            self._message_widget.update(message)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "command.error" and isinstance(payload, dict):
            self.bell()


def _env_int(key: str, fallback: int) -> int:
    value = os.environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit a text file line by line.")
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--create",
        action="store_true",
        help="Create the file when it does not exist",
    )
    parser.add_argument(
        "--undo-limit",
        type=int,
        default=_env_int("LINEEDIT_UNDO_LIMIT", DEFAULT_UNDO_LIMIT),
        help=f"Number of undo steps to keep (default: {DEFAULT_UNDO_LIMIT})",
    )
    parser.add_argument(
        "--log-preset",
        default=os.environ.get("LINEEDIT_LOG_PRESET", "production"),
        choices=("development", "production", "performance"),
        help="Telemetry preset (default: production, which logs to a file)",
    )
    args = parser.parse_args(argv)
    if args.undo_limit < 1:
        parser.error(f"--undo-limit must be at least 1 (got {args.undo_limit})")
    return args


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    try:
        dispatcher = create_dispatcher(
            args.path, create=args.create, undo_limit=args.undo_limit
        )
    except FileNotFoundError:
        raise SystemExit(
            f"File not found: {args.path} (use --create to start it)"
        ) from None
    except UnicodeDecodeError:
        raise SystemExit(f"Cannot open {args.path}: not a UTF-8 text file") from None
    except OSError as exc:
        raise SystemExit(f"Cannot open {args.path}: {exc.strerror or exc}") from None
    LineEditApp(dispatcher).run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
