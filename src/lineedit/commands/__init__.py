"""Command dispatch and command-line parsing on top of the buffer core."""

from .base import CommandBus, CommandResult
from .dispatch import CommandDispatcher
from .line import submit_command_line

__all__ = [
    "CommandBus",
    "CommandResult",
    "CommandDispatcher",
    "submit_command_line",
]
