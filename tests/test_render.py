"""Rendering tests for the three-region browser frame.

Rows are compared with ANSI styling stripped, so geometry assertions read
as plain text.
"""

from __future__ import annotations

import unittest
from unittest import mock

from notepeek.ansi import ANSI_ESCAPE_RE, clip_ansi_line, display_width, sanitize_terminal_text
from notepeek.highlight import colorize_markdown
from notepeek.layout import compute_layout, list_width_for
from notepeek.render import (
    CLEAR_AND_HOME,
    draw_frame,
    list_scroll_offset,
    render_frame,
)
from notepeek.selection import SelectionList
from notepeek.state import SessionState
from notepeek.theme import DEFAULT_THEME, PLAIN_THEME


def _plain(rows: list[str]) -> list[str]:
    return [ANSI_ESCAPE_RE.sub("", row) for row in rows]


def _state(labels, preview="", status="") -> SessionState:
    return SessionState(selection=SelectionList(labels), preview_text=preview, status_message=status)


class LayoutTests(unittest.TestCase):
    def test_layout_splits_list_preview_and_status(self) -> None:
        layout = compute_layout(50, 12)

        self.assertEqual((layout.list_area.x, layout.list_area.y), (1, 1))
        self.assertEqual(layout.list_area.width, 9)
        self.assertEqual(layout.list_area.height, 9)
        self.assertEqual(layout.preview_area.x, 10)
        self.assertEqual(layout.preview_area.width, 39)
        self.assertEqual((layout.status_area.x, layout.status_area.y), (2, 10))
        self.assertEqual((layout.status_area.width, layout.status_area.height), (46, 1))

    def test_list_width_is_twenty_percent(self) -> None:
        self.assertEqual(list_width_for(100), 20)
        self.assertEqual(list_width_for(0), 0)

    def test_tiny_terminal_yields_empty_regions(self) -> None:
        layout = compute_layout(2, 2)
        self.assertTrue(layout.list_area.empty)
        self.assertTrue(layout.preview_area.empty)
        self.assertTrue(layout.status_area.empty)


class RenderFrameTests(unittest.TestCase):
    def test_frame_has_requested_dimensions(self) -> None:
        state = _state(["alpha", "beta"], preview="# Alpha\nbody", status="oops")
        for theme in (DEFAULT_THEME, PLAIN_THEME):
            rows = render_frame(state, 50, 12, theme)
            self.assertEqual(len(rows), 12)
            for row in rows:
                self.assertEqual(display_width(row), 50)

    def test_regions_are_placed_with_borders_and_titles(self) -> None:
        state = _state(["alpha", "beta"], preview="# Alpha\nbody", status="not found")
        rows = _plain(render_frame(state, 50, 12, PLAIN_THEME))

        self.assertEqual(rows[0], " " * 50)
        self.assertEqual(rows[1][1:10], "┌List───┐")
        self.assertTrue(rows[1][10:].startswith("┌Note─"))
        self.assertEqual(rows[1][48:], "┐ ")
        self.assertEqual(rows[2][1:10], "│> alpha│")
        self.assertEqual(rows[3][1:10], "│  beta │")
        self.assertEqual(rows[2][10:], "│" + " " * 37 + "│ ")
        self.assertEqual(rows[3][10:20], "│ # Alpha ")
        self.assertEqual(rows[4][10:16], "│ body")
        self.assertEqual(rows[9][1:10], "└───────┘")
        self.assertTrue(rows[10][2:].startswith("not found"))
        self.assertEqual(rows[11], " " * 50)

    def test_selected_row_uses_selected_style(self) -> None:
        state = _state(["alpha", "beta"])
        rows = render_frame(state, 50, 12, DEFAULT_THEME)

        self.assertIn(f"{DEFAULT_THEME.selected}> alpha", rows[2])
        self.assertNotIn(DEFAULT_THEME.selected, rows[3])

    def test_list_scrolls_to_keep_cursor_visible(self) -> None:
        labels = [f"n{idx}" for idx in range(10)]
        state = _state(labels)
        for _ in range(9):
            state.selection.next()
        rows = _plain(render_frame(state, 50, 12, PLAIN_THEME))

        # Seven interior rows: items 3..9 with the cursor on the last one.
        self.assertEqual(rows[2][1:10], "│  n3   │")
        self.assertEqual(rows[8][1:10], "│> n9   │")
        self.assertEqual(list_scroll_offset(9, 7), 3)
        self.assertEqual(list_scroll_offset(2, 7), 0)
        self.assertEqual(list_scroll_offset(None, 7), 0)

    def test_empty_list_shows_placeholder_without_crashing(self) -> None:
        rows = _plain(render_frame(_state([]), 100, 12, PLAIN_THEME))

        self.assertIn("no notes", rows[2])
        self.assertNotIn("> ", rows[2])

    def test_preview_lines_are_clipped_not_wrapped(self) -> None:
        long_line = "x" * 200
        rows = _plain(render_frame(_state(["a"], preview=long_line + "\nnext"), 50, 12, PLAIN_THEME))

        self.assertEqual(rows[3][10:], "│ " + "x" * 35 + " │ ")
        self.assertEqual(rows[4][10:16], "│ next")

    def test_colorize_is_applied_to_preview_only(self) -> None:
        colorize = mock.Mock(side_effect=lambda text: text.upper())
        rows = _plain(render_frame(_state(["alpha"], preview="hello"), 50, 12, PLAIN_THEME, colorize))

        colorize.assert_called_once_with("hello")
        self.assertIn("HELLO", rows[3])
        self.assertIn("alpha", rows[2])

    def test_status_shows_first_line_only(self) -> None:
        rows = _plain(render_frame(_state([], status="first\nsecond"), 50, 12, PLAIN_THEME))

        self.assertTrue(rows[10][2:].startswith("first"))
        self.assertNotIn("second", "".join(rows))

    def test_render_does_not_mutate_state(self) -> None:
        state = _state(["alpha", "beta"], preview="p", status="s")
        before = (state.selection.cursor, state.preview_text, state.status_message, state.mode)

        first = render_frame(state, 60, 15)
        second = render_frame(state, 60, 15)

        self.assertEqual(first, second)
        self.assertEqual(before, (state.selection.cursor, state.preview_text, state.status_message, state.mode))

    def test_degenerate_sizes_render_blank_rows(self) -> None:
        state = _state(["alpha"], preview="text", status="msg")
        self.assertEqual(render_frame(state, 0, 0), [])
        self.assertEqual(render_frame(state, 3, 2), ["   ", "   "])
        rows = render_frame(state, 10, 5)
        self.assertEqual(len(rows), 5)
        self.assertTrue(all(display_width(row) == 10 for row in rows))

    def test_wide_characters_keep_row_width(self) -> None:
        rows = render_frame(_state(["日本語のノート"], preview="漢字テキスト"), 50, 12, PLAIN_THEME)
        self.assertTrue(all(display_width(row) == 50 for row in rows))

    def test_escape_sequences_in_preview_are_shown_escaped(self) -> None:
        state = _state(["note"], preview="hi\x1b[?1049l\x1b[?25h\x1b[2J")
        frame = "".join(render_frame(state, 80, 10, PLAIN_THEME))

        self.assertNotIn("\x1b[?1049l", frame)
        self.assertNotIn("\x1b[2J", frame)
        self.assertIn("hi\\x1b[?1049l\\x1b[?25h\\x1b[2J", frame)

    def test_escape_sequences_are_escaped_before_colorize(self) -> None:
        state = _state(["note"], preview="hi\x1b[?1049l")
        frame = "".join(render_frame(state, 80, 10, PLAIN_THEME, colorize_markdown))

        self.assertNotIn("\x1b[?1049l", frame)

    def test_escape_sequences_in_labels_and_status_are_shown_escaped(self) -> None:
        state = _state(["a\x1b[?1000l", "b\x07"], status="bad\x1b[2J")
        frame = "".join(render_frame(state, 120, 10, PLAIN_THEME))

        self.assertNotIn("\x1b[?1000l", frame)
        self.assertNotIn("\x07", frame)
        self.assertNotIn("\x1b[2J", frame)
        self.assertIn("a\\x1b[?1000l", frame)
        self.assertIn("b\\x07", frame)
        self.assertIn("bad\\x1b[2J", frame)


class AnsiTextTests(unittest.TestCase):
    def test_clip_keeps_colours_and_drops_other_sequences(self) -> None:
        self.assertEqual(clip_ansi_line("x\x1b[2Jy\x1b[31mz\x1b[?25l", 10), "xy\x1b[31mz")

    def test_clip_drops_bare_control_characters(self) -> None:
        self.assertEqual(clip_ansi_line("a\rb\x07c", 10), "abc")

    def test_sanitize_keeps_layout_characters(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\tb\nc"), "a\tb\nc")
        self.assertEqual(sanitize_terminal_text("\x1b[2J\x7f\x9b"), "\\x1b[2J\\x7f\\x9b")


class DrawFrameTests(unittest.TestCase):
    def test_draw_frame_writes_full_frame_in_one_call(self) -> None:
        with mock.patch("notepeek.render.os.write") as write_mock:
            draw_frame(1, ["ab", "cd"])

        write_mock.assert_called_once_with(1, (CLEAR_AND_HOME + "ab\r\ncd").encode("utf-8"))


if __name__ == "__main__":
    unittest.main()
