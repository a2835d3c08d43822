"""Result and event types shared by the command layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass(slots=True)
class CommandResult:
    """Outcome of one dispatched command."""

    ok: bool
    status: str = "ok"
    message: Optional[str] = None

    @classmethod
    def failure(cls, status: str, message: Optional[str] = None) -> "CommandResult":
        return cls(ok=False, status=status, message=message)


class CommandBus:
    """Minimal event bus for broadcasting command outcomes to hosts."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


__all__ = ["CommandResult", "CommandBus"]
