"""Frame rendering for the note browser.

``render_frame`` is a pure function of the session state and terminal size:
it returns one string per screen row and never touches the state.
``draw_frame`` writes a complete frame in a single call.
"""

from __future__ import annotations

import os
from collections.abc import Callable

from .ansi import display_width, fit_ansi_line, sanitize_terminal_text
from .layout import Rect, compute_layout
from .selection import SelectionList
from .state import SessionState
from .theme import DEFAULT_THEME, UITheme

LIST_TITLE = "List"
PREVIEW_TITLE = "Note"
SELECTED_MARKER = "> "
EMPTY_LIST_TEXT = "no notes"
PREVIEW_PADDING = 1

CLEAR_AND_HOME = "\033[H\033[J"


def list_scroll_offset(cursor: int | None, visible_rows: int) -> int:
    """First visible list index such that the cursor row is on screen."""
    if cursor is None or visible_rows <= 0:
        return 0
    return max(0, cursor - visible_rows + 1)


def _blank_rows(width: int, height: int) -> list[str]:
    return [" " * max(0, width) for _ in range(max(0, height))]


def box_rows(title: str, body: list[str], width: int, height: int, theme: UITheme) -> list[str]:
    """Draw a bordered box of ``width`` x ``height`` with ``body`` as its interior rows.

    Body rows must already be exactly ``width - 2`` columns wide.
    """
    if width < 2 or height < 2:
        return _blank_rows(width, height)

    inner_width = width - 2
    border, reset = theme.border, theme.reset
    title_text = title[:inner_width]
    top = (
        f"{border}┌{reset}"
        f"{theme.title}{title_text}{reset}"
        f"{border}{'─' * (inner_width - len(title_text))}┐{reset}"
    )
    bottom = f"{border}└{'─' * inner_width}┘{reset}"

    rows = [top]
    for row in range(height - 2):
        content = body[row] if row < len(body) else " " * inner_width
        rows.append(f"{border}│{reset}{content}{border}│{reset}")
    rows.append(bottom)
    return rows


def list_rows(selection: SelectionList, width: int, rows: int, theme: UITheme) -> list[str]:
    """Interior rows of the note list, with the current label marked."""
    if width <= 0 or rows <= 0:
        return []
    if not len(selection):
        return [fit_ansi_line(f"{theme.placeholder}{EMPTY_LIST_TEXT}", width)] + _blank_rows(width, rows - 1)

    cursor = selection.cursor
    offset = list_scroll_offset(cursor, rows)
    items = selection.items
    indent = " " * len(SELECTED_MARKER)
    out: list[str] = []
    for row in range(rows):
        idx = offset + row
        if idx >= len(items):
            out.append(" " * width)
            continue
        label = sanitize_terminal_text(items[idx])
        if idx == cursor:
            out.append(fit_ansi_line(f"{theme.selected}{SELECTED_MARKER}{label}", width))
        else:
            out.append(fit_ansi_line(f"{theme.item}{indent}{label}", width))
    return out


def preview_rows(
    text: str,
    width: int,
    rows: int,
    colorize: Callable[[str], str] | None = None,
) -> list[str]:
    """Interior rows of the preview, left-aligned with padding and clipped, not wrapped."""
    if width <= 0 or rows <= 0:
        return []
    pad_y = PREVIEW_PADDING if rows > 2 * PREVIEW_PADDING else 0
    pad_x = PREVIEW_PADDING if width > 2 * PREVIEW_PADDING else 0
    text_width = width - 2 * pad_x
    text = sanitize_terminal_text(text)
    styled = colorize(text) if colorize is not None and text else text
    lines = styled.split("\n") if styled else []

    out = _blank_rows(width, pad_y)
    for idx in range(rows - 2 * pad_y):
        line = lines[idx] if idx < len(lines) else ""
        out.append(" " * pad_x + fit_ansi_line(line, text_width) + " " * pad_x)
    out.extend(_blank_rows(width, pad_y))
    return out


def status_row(message: str, width: int, theme: UITheme) -> str:
    first_line = message.splitlines()[0] if message else ""
    if not first_line:
        return " " * max(0, width)
    return fit_ansi_line(f"{theme.status}{sanitize_terminal_text(first_line)}", width)


def _place(segments: list[list[tuple[int, str]]], area: Rect, region: list[str]) -> None:
    for row, text in enumerate(region[: max(0, area.height)]):
        y = area.y + row
        if 0 <= y < len(segments):
            segments[y].append((area.x, text))


def render_frame(
    state: SessionState,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
    colorize: Callable[[str], str] | None = None,
) -> list[str]:
    """Lay out list, preview and status regions for ``state``.

    Returns exactly ``height`` rows, each ``width`` columns wide.
    """
    width = max(0, width)
    height = max(0, height)
    layout = compute_layout(width, height)
    segments: list[list[tuple[int, str]]] = [[] for _ in range(height)]

    list_area = layout.list_area
    if not list_area.empty:
        body = list_rows(state.selection, list_area.width - 2, list_area.height - 2, theme)
        _place(segments, list_area, box_rows(LIST_TITLE, body, list_area.width, list_area.height, theme))

    preview_area = layout.preview_area
    if not preview_area.empty:
        body = preview_rows(state.preview_text, preview_area.width - 2, preview_area.height - 2, colorize)
        _place(
            segments,
            preview_area,
            box_rows(PREVIEW_TITLE, body, preview_area.width, preview_area.height, theme),
        )

    status_area = layout.status_area
    if not status_area.empty:
        _place(segments, status_area, [status_row(state.status_message, status_area.width, theme)])

    return [_join_segments(row_segments, width) for row_segments in segments]


def _join_segments(row_segments: list[tuple[int, str]], width: int) -> str:
    parts: list[str] = []
    col = 0
    for x, text in sorted(row_segments, key=lambda segment: segment[0]):
        if x > col:
            parts.append(" " * (x - col))
            col = x
        parts.append(text)
        col += display_width(text)
    if col < width:
        parts.append(" " * (width - col))
    return "".join(parts)


def draw_frame(fd: int, rows: list[str]) -> None:
    """Write a full frame: home, clear, then every row."""
    os.write(fd, (CLEAR_AND_HOME + "\r\n".join(rows)).encode("utf-8", errors="replace"))
