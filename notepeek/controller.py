"""Event loop and state machine for the note browser.

The controller is the only writer of ``SessionState``. Each iteration draws
a full frame, blocks for one key, and applies the bound command. Failures
from the note store end up on the status line and never leave the loop.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Callable

from .config import Settings
from .errors import NoteError
from .input import read_key
from .keys import Command, KeyComboRegistry
from .notes import NoteBackend, NoteProperty
from .render import draw_frame, render_frame
from .state import SessionMode, SessionState
from .terminal import TerminalSession
from .theme import DEFAULT_THEME, UITheme

logger = logging.getLogger(__name__)

FALLBACK_TERMINAL_SIZE = (80, 24)


class BrowserController:
    def __init__(
        self,
        state: SessionState,
        backend: NoteBackend,
        settings: Settings,
        terminal: TerminalSession,
        *,
        theme: UITheme = DEFAULT_THEME,
        colorize: Callable[[str], str] | None = None,
        registry: KeyComboRegistry | None = None,
        read_key: Callable[[int], str] = read_key,
        draw: Callable[[int, list[str]], None] = draw_frame,
        get_terminal_size: Callable[[tuple[int, int]], tuple[int, int]] = shutil.get_terminal_size,
    ) -> None:
        self.state = state
        self.backend = backend
        self.settings = settings
        self.terminal = terminal
        self.theme = theme
        self.colorize = colorize
        self.registry = registry if registry is not None else KeyComboRegistry()
        self._read_key = read_key
        self._draw = draw
        self._get_terminal_size = get_terminal_size
        self._handlers: dict[Command, Callable[[], None]] = {
            Command.QUIT: self.quit,
            Command.NEXT: self.select_next,
            Command.PREVIOUS: self.select_previous,
            Command.OPEN: self.open_selected,
        }

    def _selected_identifier(self) -> str | None:
        label = self.state.selection.selected()
        if label is None:
            return None
        return self.backend.find_identifier(NoteProperty.NAME, label)

    def refresh_preview(self) -> None:
        """Reload the preview for the selected note.

        A read failure keeps the previous preview and reports on the status
        line; an empty list or an unindexed label changes nothing.
        """
        note_id = self._selected_identifier()
        if note_id is None:
            return
        try:
            self.state.preview_text = self.backend.read_content(note_id, self.settings)
        except NoteError as exc:
            logger.warning("could not read note %s: %s", note_id, exc)
            self.state.status_message = str(exc)

    def select_next(self) -> None:
        self.state.selection.next()
        self.refresh_preview()

    def select_previous(self) -> None:
        self.state.selection.previous()
        self.refresh_preview()

    def quit(self) -> None:
        self.state.mode = SessionMode.EXITING

    def open_selected(self) -> None:
        """Hand the terminal to the editor for the selected note, then take it back."""
        note_id = self._selected_identifier()
        if note_id is None:
            return

        self.state.mode = SessionMode.EDITING
        try:
            self.terminal.suspend()
            error = self.backend.open(note_id, self.settings, False)
            if error:
                self.state.status_message = error
        finally:
            self.terminal.resume()
            self.state.mode = SessionMode.BROWSING

    def handle_key(self, key: str) -> None:
        """Apply the command bound to ``key``; unbound keys are ignored."""
        command = self.registry.dispatch(key, self._handlers)
        if command is not None:
            logger.debug("key %r -> %s", key, command.value)

    def draw(self) -> None:
        columns, lines = self._get_terminal_size(FALLBACK_TERMINAL_SIZE)
        rows = render_frame(self.state, columns, lines, self.theme, self.colorize)
        self._draw(self.terminal.stdout_fd, rows)

    def run(self) -> None:
        """Run until a quit command; the terminal must already be acquired."""
        self.refresh_preview()
        while self.state.mode is not SessionMode.EXITING:
            self.draw()
            self.handle_key(self._read_key(self.terminal.stdin_fd))
