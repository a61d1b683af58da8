"""Terminal control for the browser session.

Owns raw-mode lifecycle, alternate-screen switching and mouse capture, and
the hand-off of the terminal to an external editor and back.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
import termios
import tty
from typing import ClassVar

from .errors import TerminalError

logger = logging.getLogger(__name__)

MOUSE_ON = b"\x1b[?1000h\x1b[?1002h\x1b[?1006h"
MOUSE_OFF = b"\x1b[?1000l\x1b[?1002l\x1b[?1006l"
# Enter alternate screen and hide cursor, then enable mouse reporting.
ENTER_TUI = b"\x1b[?1049h\x1b[?25l" + MOUSE_ON
# Disable mouse reporting, show cursor, and restore the main screen buffer.
EXIT_TUI = MOUSE_OFF + b"\x1b[?25h\x1b[?1049l"
CLEAR_SCREEN = b"\x1b[2J\x1b[H"


class TerminalSession:
    """Exclusive ownership of the terminal's raw mode and alternate screen.

    Only one session may be acquired per process at a time. ``release`` never
    raises: restoring the terminal happens while tearing down, so failures are
    logged and returned for the caller to report.
    """

    _live: ClassVar[TerminalSession | None] = None

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except (termios.error, OSError) as exc:
            raise TerminalError(f"Cannot read terminal attributes: {exc}") from exc
        self._acquired = False

    @property
    def acquired(self) -> bool:
        return self._acquired

    def acquire(self) -> None:
        """Enter raw alternate-screen mode with mouse capture enabled."""
        live = TerminalSession._live
        if live is not None:
            raise TerminalError("A terminal session is already active.")
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
            os.write(self.stdout_fd, ENTER_TUI)
        except (termios.error, OSError) as exc:
            self._rollback()
            raise TerminalError(f"Cannot initialise terminal: {exc}") from exc
        self._acquired = True
        TerminalSession._live = self
        logger.debug("terminal session acquired (stdin=%d, stdout=%d)", self.stdin_fd, self.stdout_fd)

    def _rollback(self) -> None:
        for problem in self._restore():
            logger.warning("rollback after failed acquire: %s", problem)

    def _restore(self) -> list[str]:
        problems: list[str] = []
        try:
            os.write(self.stdout_fd, EXIT_TUI)
        except OSError as exc:
            problems.append(f"Failed to leave alternate screen: {exc}")
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)
        except (termios.error, OSError) as exc:
            problems.append(f"Failed to restore terminal mode: {exc}")
        return problems

    def release(self) -> list[str]:
        """Restore the main screen, cooked input mode and a visible cursor.

        Each step is attempted even when an earlier one fails. Returns the
        failure descriptions; calling again after a release is a no-op.
        """
        if not self._acquired:
            return []
        self._acquired = False
        if TerminalSession._live is self:
            TerminalSession._live = None
        problems = self._restore()
        for problem in problems:
            logger.warning(problem)
        logger.debug("terminal session released")
        return problems

    def suspend(self) -> None:
        """Hand the terminal to another program: main screen, cooked mode, no mouse."""
        os.write(self.stdout_fd, EXIT_TUI)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def resume(self) -> None:
        """Take the terminal back after ``suspend`` with a cleared alternate screen."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_TUI + CLEAR_SCREEN)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with acquire/release.

        Release failures are printed once the terminal is back in normal mode.
        """
        self.acquire()
        try:
            yield self
        finally:
            for problem in self.release():
                print(problem, file=sys.stderr)
