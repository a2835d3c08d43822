"""In-memory line editor core with bounded undo/redo."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "runtime",
    "storage",
]

__version__ = "0.1.0"
