"""Textual host for the line editor."""

from .controller import TextualEditorAdapter, TextualUIHooks
from .render import render_buffer, status_text

__all__ = [
    "TextualEditorAdapter",
    "TextualUIHooks",
    "render_buffer",
    "status_text",
]
