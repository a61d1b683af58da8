"""Screen geometry for the browser frame.

Everything here is plain arithmetic on terminal cells. The frame is an outer
one-cell margin around a body (note list beside preview) and a single status
row underneath.
"""

from __future__ import annotations

from dataclasses import dataclass

OUTER_MARGIN = 1
STATUS_ROWS = 1
STATUS_INSET = 1
LIST_WIDTH_PERCENT = 20


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inner(self, vertical: int = 0, horizontal: int = 0) -> Rect:
        """Shrink by ``vertical`` rows top and bottom and ``horizontal`` columns each side."""
        if self.width < 2 * horizontal or self.height < 2 * vertical:
            return Rect(self.x, self.y, 0, 0)
        return Rect(
            self.x + horizontal,
            self.y + vertical,
            self.width - 2 * horizontal,
            self.height - 2 * vertical,
        )


@dataclass(frozen=True)
class FrameLayout:
    list_area: Rect
    preview_area: Rect
    status_area: Rect


def list_width_for(total_width: int, percent: int = LIST_WIDTH_PERCENT) -> int:
    """Width of the list column for a body ``total_width`` cells wide."""
    if total_width <= 0:
        return 0
    return max(0, min(total_width, (total_width * percent) // 100))


def compute_layout(width: int, height: int) -> FrameLayout:
    """Split a ``width`` x ``height`` terminal into list, preview and status areas."""
    inner = Rect(0, 0, max(0, width), max(0, height)).inner(OUTER_MARGIN, OUTER_MARGIN)
    body_height = max(0, inner.height - STATUS_ROWS)
    status_height = min(STATUS_ROWS, inner.height)
    body = Rect(inner.x, inner.y, inner.width, body_height)
    status_row = Rect(inner.x, inner.y + body_height, inner.width, status_height)

    left = list_width_for(body.width)
    list_area = Rect(body.x, body.y, left, body.height)
    preview_area = Rect(body.x + left, body.y, body.width - left, body.height)
    return FrameLayout(
        list_area=list_area,
        preview_area=preview_area,
        status_area=status_row.inner(0, STATUS_INSET),
    )
