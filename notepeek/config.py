"""Persistent JSON settings.

Stores the notes directory, editor command and display preferences.
All access is defensive: malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir

from .highlight import DEFAULT_STYLE
from .theme import DEFAULT_THEME

logger = logging.getLogger(__name__)

APP_NAME = "notepeek"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_NOTES_DIR = Path(user_data_dir(APP_NAME, appauthor=False)) / "notes"
DEFAULT_EXTENSION = ".md"


@dataclass(frozen=True)
class Settings:
    """Configuration handed through the browser to the note store untouched."""

    notes_dir: Path = DEFAULT_NOTES_DIR
    editor: str | None = None
    extension: str = DEFAULT_EXTENSION
    theme: str = DEFAULT_THEME.name
    style: str = DEFAULT_STYLE
    highlight: bool = True

    def with_overrides(self, **overrides: object) -> Settings:
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are logged and otherwise ignored; settings are not
    essential to browsing.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _string_value(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _normalize_extension(value: str | None) -> str:
    if not value:
        return DEFAULT_EXTENSION
    return value if value.startswith(".") else f".{value}"


def load_settings() -> Settings:
    """Build ``Settings`` from the config file, dropping invalid values."""
    data = load_config()
    notes_dir = _string_value(data, "notes_dir")
    highlight = data.get("highlight")
    return Settings(
        notes_dir=Path(notes_dir).expanduser() if notes_dir else DEFAULT_NOTES_DIR,
        editor=_string_value(data, "editor"),
        extension=_normalize_extension(_string_value(data, "extension")),
        theme=_string_value(data, "theme") or DEFAULT_THEME.name,
        style=_string_value(data, "style") or DEFAULT_STYLE,
        highlight=highlight if isinstance(highlight, bool) else True,
    )


def save_settings(settings: Settings) -> None:
    """Persist ``settings`` while keeping unknown keys already in the file."""
    config = load_config()
    config.update(
        {
            "notes_dir": str(settings.notes_dir),
            "extension": settings.extension,
            "theme": settings.theme,
            "style": settings.style,
            "highlight": settings.highlight,
        }
    )
    if settings.editor:
        config["editor"] = settings.editor
    else:
        config.pop("editor", None)
    save_config(config)
