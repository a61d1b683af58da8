"""Exception types shared across notepeek.

Collaborator failures are converted to status-line text by the controller;
only terminal acquisition failures are allowed to end the process.
"""

from __future__ import annotations


class NotepeekError(Exception):
    """Base class for notepeek errors."""


class NoteError(NotepeekError):
    """A note's content could not be read. ``str(exc)`` is shown to the user."""


class TerminalError(NotepeekError):
    """Terminal modes could not be acquired, or a session is already live."""
