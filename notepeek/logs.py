"""File logging setup.

The terminal belongs to the browser while it runs, so log records go to a
file under the platform log directory rather than stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FILENAME = "notepeek.log"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def default_log_path() -> Path:
    return Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


def configure_logging(log_file: Path | None = None, verbose: bool = False) -> Path | None:
    """Attach a file handler to the ``notepeek`` logger.

    Returns the log path, or ``None`` when the file cannot be opened; logging
    is then left unconfigured rather than failing startup.
    """
    path = log_file if log_file is not None else default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger(APP_NAME)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    root.propagate = False
    return path
