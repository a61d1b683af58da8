"""Tests for browser bootstrap wiring."""

from __future__ import annotations

import contextlib
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from notepeek import app
from notepeek.config import Settings
from notepeek.errors import TerminalError
from notepeek.notes import FileNoteStore
from notepeek.theme import OCEAN_THEME, PLAIN_THEME


class _FakeTerminal:
    instances: list["_FakeTerminal"] = []

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self.events: list[str] = []
        _FakeTerminal.instances.append(self)

    @contextlib.contextmanager
    def raw_mode(self):
        self.events.append("acquire")
        try:
            yield self
        finally:
            self.events.append("release")


class RunBrowserTests(unittest.TestCase):
    def setUp(self) -> None:
        _FakeTerminal.instances = []

    def test_scans_notes_and_runs_controller_inside_raw_mode(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "beta.md").write_text("", encoding="utf-8")
            (root / "alpha.md").write_text("", encoding="utf-8")
            settings = Settings(notes_dir=root, theme="ocean")

            with mock.patch("notepeek.app.TerminalSession", _FakeTerminal), mock.patch(
                "notepeek.app.BrowserController"
            ) as controller_cls:
                controller_cls.return_value.run.side_effect = lambda: _FakeTerminal.instances[0].events.append("run")
                app.run_browser(settings, stdin_fd=5, stdout_fd=6)

        terminal = _FakeTerminal.instances[0]
        self.assertEqual((terminal.stdin_fd, terminal.stdout_fd), (5, 6))
        self.assertEqual(terminal.events, ["acquire", "run", "release"])
        state, backend, passed_settings, passed_terminal = controller_cls.call_args.args
        self.assertEqual(state.selection.items, ("alpha", "beta"))
        self.assertIsInstance(backend, FileNoteStore)
        self.assertIs(passed_settings, settings)
        self.assertIs(passed_terminal, terminal)
        self.assertIs(controller_cls.call_args.kwargs["theme"], OCEAN_THEME)
        self.assertIsNotNone(controller_cls.call_args.kwargs["colorize"])

    def test_no_color_disables_highlighting_and_theme(self) -> None:
        backend = mock.Mock()
        with mock.patch("notepeek.app.TerminalSession", _FakeTerminal), mock.patch(
            "notepeek.app.BrowserController"
        ) as controller_cls:
            app.run_browser(Settings(), no_color=True, backend=backend, labels=["a"], stdin_fd=0, stdout_fd=1)

        self.assertIs(controller_cls.call_args.kwargs["theme"], PLAIN_THEME)
        self.assertIsNone(controller_cls.call_args.kwargs["colorize"])

    def test_terminal_release_happens_when_loop_raises(self) -> None:
        with mock.patch("notepeek.app.TerminalSession", _FakeTerminal), mock.patch(
            "notepeek.app.BrowserController"
        ) as controller_cls:
            controller_cls.return_value.run.side_effect = RuntimeError("loop failed")
            with self.assertRaises(RuntimeError):
                app.run_browser(Settings(), backend=mock.Mock(), labels=[], stdin_fd=0, stdout_fd=1)

        self.assertEqual(_FakeTerminal.instances[0].events, ["acquire", "release"])

    def test_terminal_acquisition_failure_propagates_before_loop(self) -> None:
        with mock.patch(
            "notepeek.app.TerminalSession", side_effect=TerminalError("not a tty")
        ), mock.patch("notepeek.app.BrowserController") as controller_cls:
            with self.assertRaises(TerminalError):
                app.run_browser(Settings(), backend=mock.Mock(), labels=[], stdin_fd=0, stdout_fd=1)

        controller_cls.assert_not_called()


if __name__ == "__main__":
    unittest.main()
