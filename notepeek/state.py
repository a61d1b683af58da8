"""Mutable session state owned by the controller."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from .selection import SelectionList


class SessionMode(enum.Enum):
    BROWSING = "browsing"
    EDITING = "editing"
    EXITING = "exiting"


@dataclass
class SessionState:
    selection: SelectionList = field(default_factory=SelectionList)
    preview_text: str = ""
    status_message: str = ""
    mode: SessionMode = SessionMode.BROWSING
