"""Key bindings for the browser.

Maps decoded key tokens to commands. Matching is exact and case-sensitive:
``Q`` is not ``q``.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from .input import EOF_KEY


class Command(enum.Enum):
    QUIT = "quit"
    NEXT = "next"
    PREVIOUS = "previous"
    OPEN = "open"


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single command."""

    combos: tuple[str, ...]
    command: Command


DEFAULT_BINDINGS: tuple[KeyComboBinding, ...] = (
    KeyComboBinding(("q", EOF_KEY), Command.QUIT),
    KeyComboBinding(("j", "DOWN"), Command.NEXT),
    KeyComboBinding(("k", "UP"), Command.PREVIOUS),
    KeyComboBinding(("l", "ENTER_CR", "ENTER_LF"), Command.OPEN),
)


class KeyComboRegistry:
    """Small key-dispatch table from key tokens to command handlers."""

    def __init__(self, bindings: tuple[KeyComboBinding, ...] = DEFAULT_BINDINGS) -> None:
        self._commands: dict[str, Command] = {}
        for binding in bindings:
            self.register_binding(binding)

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing commands for same combos."""
        for combo in binding.combos:
            self._commands[combo] = binding.command
        return self

    def command_for(self, key: str) -> Command | None:
        return self._commands.get(key)

    def dispatch(self, key: str, handlers: dict[Command, Callable[[], None]]) -> Command | None:
        """Invoke the handler bound to ``key`` and return its command, if any."""
        command = self.command_for(key)
        if command is None:
            return None
        handlers[command]()
        return command
