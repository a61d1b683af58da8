"""Markdown colouring for the preview pane, backed by Pygments."""

from __future__ import annotations

from functools import lru_cache

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import MarkdownLexer
from pygments.styles import get_all_styles
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"


def normalize_style(style: str | None) -> str:
    """Return ``style`` when Pygments knows it, otherwise the default style."""
    if style and style in set(get_all_styles()):
        return style
    return DEFAULT_STYLE


@lru_cache(maxsize=8)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    try:
        return Terminal256Formatter(style=style)
    except ClassNotFound:
        return Terminal256Formatter(style=DEFAULT_STYLE)


@lru_cache(maxsize=64)
def colorize_markdown(text: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``text`` with ANSI colouring for Markdown syntax.

    Trailing newline handling matches the input so line counts are unchanged.
    Results are cached because the same preview is redrawn on every keystroke.
    """
    if not text:
        return text
    rendered = highlight(text, MarkdownLexer(stripnl=False), _formatter_for_style(style))
    if not text.endswith("\n") and rendered.endswith("\n"):
        rendered = rendered[:-1]
    return rendered
