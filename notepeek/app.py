"""Browser bootstrap: build the session, own the terminal, run the loop."""

from __future__ import annotations

import logging
import sys
from functools import partial

from .config import Settings
from .controller import BrowserController
from .highlight import colorize_markdown, normalize_style
from .notes import FileNoteStore, NoteBackend, NoteIndex
from .selection import SelectionList
from .state import SessionState
from .terminal import TerminalSession
from .theme import resolve_theme

logger = logging.getLogger(__name__)


def build_state(labels: list[str]) -> SessionState:
    return SessionState(selection=SelectionList(labels))


def run_browser(
    settings: Settings,
    *,
    no_color: bool = False,
    backend: NoteBackend | None = None,
    labels: list[str] | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
) -> None:
    """Browse the notes described by ``settings`` until the user quits.

    Raises ``TerminalError`` before anything is drawn if the terminal cannot be
    taken over. Terminal restore problems are printed after the loop ends.
    """
    if backend is None or labels is None:
        index = NoteIndex.scan(settings.notes_dir, settings.extension)
        backend = backend if backend is not None else FileNoteStore(index)
        labels = labels if labels is not None else index.labels()
    if stdin_fd is None:
        stdin_fd = sys.stdin.fileno()
    if stdout_fd is None:
        stdout_fd = sys.stdout.fileno()

    colorize = None
    if settings.highlight and not no_color:
        colorize = partial(colorize_markdown, style=normalize_style(settings.style))

    state = build_state(labels)
    terminal = TerminalSession(stdin_fd, stdout_fd)
    controller = BrowserController(
        state,
        backend,
        settings,
        terminal,
        theme=resolve_theme(settings.theme, no_color=no_color),
        colorize=colorize,
    )
    logger.info("browsing %d notes in %s", len(state.selection), settings.notes_dir)
    with terminal.raw_mode():
        controller.run()
