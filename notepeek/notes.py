"""File-backed note store.

Notes are Markdown files under the notes directory. The browser only talks
to this module through the ``NoteBackend`` protocol: look a note up by a
property, read its content, or open it in the editor.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .ansi import sanitize_terminal_text
from .config import Settings
from .editor import launch_editor
from .errors import NoteError

logger = logging.getLogger(__name__)

FRONT_MATTER_FENCE = "---"
NAME_KEYS = ("name", "title")


class NoteProperty(enum.Enum):
    NAME = "name"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class Note:
    identifier: str
    name: str
    path: Path


class NoteBackend(Protocol):
    def find_identifier(self, prop: NoteProperty, value: str) -> str | None: ...

    def read_content(self, note_id: str, settings: Settings) -> str: ...

    def open(self, note_id: str, settings: Settings, create: bool) -> str | None: ...


def read_text(path: Path) -> str:
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_text(encoding="utf-8", errors="replace")


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
        return value[1:-1]
    return value


def front_matter_name(text: str) -> str | None:
    """Return the ``name:`` (or ``title:``) field of a leading ``---`` block."""
    lines = text.splitlines()
    if not lines or lines[0].strip() != FRONT_MATTER_FENCE:
        return None
    fields: dict[str, str] = {}
    for line in lines[1:]:
        if line.strip() == FRONT_MATTER_FENCE:
            break
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fields.setdefault(key.strip().lower(), _strip_quotes(value.strip()))
    else:
        return None
    for key in NAME_KEYS:
        if fields.get(key):
            return fields[key]
    return None


def _iter_note_paths(root: Path, extension: str) -> Iterator[Path]:
    for path in sorted(root.rglob(f"*{extension}")):
        relative = path.relative_to(root)
        if any(part.startswith(".") for part in relative.parts):
            continue
        if path.is_file():
            yield path


class NoteIndex:
    """Property index over the notes in one directory."""

    def __init__(self, root: Path, extension: str, notes: list[Note]) -> None:
        self.root = root
        self.extension = extension
        self._by_id: dict[str, Note] = {}
        self._by_name: dict[str, Note] = {}
        for note in notes:
            self._by_id[note.identifier] = note
            existing = self._by_name.get(note.name)
            if existing is not None:
                logger.warning(
                    "duplicate note name %r: keeping %s, ignoring %s",
                    note.name,
                    existing.identifier,
                    note.identifier,
                )
                continue
            self._by_name[note.name] = note

    @classmethod
    def scan(cls, root: Path, extension: str = ".md") -> NoteIndex:
        """Index every note file below ``root``; unreadable files are skipped."""
        notes: list[Note] = []
        for path in _iter_note_paths(root, extension):
            identifier = path.relative_to(root).with_suffix("").as_posix()
            try:
                name = sanitize_terminal_text(front_matter_name(read_text(path)) or path.stem)
            except OSError as exc:
                logger.warning("skipping unreadable note %s: %s", path, exc)
                continue
            notes.append(Note(identifier=identifier, name=name, path=path))
        logger.debug("indexed %d notes under %s", len(notes), root)
        return cls(root, extension, notes)

    def labels(self) -> list[str]:
        """Note names in display order."""
        return sorted(self._by_name, key=lambda name: (name.casefold(), name))

    def find(self, prop: NoteProperty, value: str) -> Note | None:
        if prop is NoteProperty.NAME:
            return self._by_name.get(value)
        return self._by_id.get(value)

    def path_for(self, note_id: str) -> Path:
        note = self._by_id.get(note_id)
        if note is not None:
            return note.path
        return self.root / f"{note_id}{self.extension}"

    def __len__(self) -> int:
        return len(self._by_id)


class FileNoteStore:
    """``NoteBackend`` over a ``NoteIndex`` and the configured editor."""

    def __init__(self, index: NoteIndex) -> None:
        self.index = index

    def find_identifier(self, prop: NoteProperty, value: str) -> str | None:
        note = self.index.find(prop, value)
        return note.identifier if note is not None else None

    def read_content(self, note_id: str, settings: Settings) -> str:
        path = self.index.path_for(note_id)
        try:
            return read_text(path)
        except FileNotFoundError as exc:
            raise NoteError("not found") from exc
        except OSError as exc:
            raise NoteError(exc.strerror or str(exc)) from exc

    def open(self, note_id: str, settings: Settings, create: bool) -> str | None:
        path = self.index.path_for(note_id)
        if not path.exists():
            if not create:
                return "not found"
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.touch()
            except OSError as exc:
                return f"Cannot create note: {exc.strerror or exc}"
        return launch_editor(path, settings.editor)
