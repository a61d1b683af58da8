"""Ordered note labels with a cyclic cursor."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class SelectionList:
    """Fixed sequence of labels plus the index of the current one.

    The cursor is ``None`` exactly when the list is empty; otherwise it stays
    within ``0 <= cursor < len(items)``. Navigation wraps at both ends.
    """

    def __init__(self, items: Iterable[str] = ()) -> None:
        self._items: tuple[str, ...] = tuple(items)
        self._cursor: int | None = 0 if self._items else None

    @property
    def items(self) -> tuple[str, ...]:
        return self._items

    @property
    def cursor(self) -> int | None:
        return self._cursor

    def selected(self) -> str | None:
        if self._cursor is None:
            return None
        return self._items[self._cursor]

    def next(self) -> None:
        if self._cursor is None:
            return
        self._cursor = (self._cursor + 1) % len(self._items)

    def previous(self) -> None:
        if self._cursor is None:
            return
        self._cursor = (self._cursor - 1) % len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"SelectionList(items={self._items!r}, cursor={self._cursor!r})"
