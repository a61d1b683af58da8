"""Editor launch helper for external note edits.

The caller is responsible for handing the terminal over first.
Returns an error message string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def resolve_editor_command(configured: str | None = None) -> list[str] | str:
    """Return the editor argv, or an error message when none is usable.

    Preference order is the configured command, ``$VISUAL``, then ``$EDITOR``.
    """
    for source in (configured, os.environ.get("VISUAL"), os.environ.get("EDITOR")):
        candidate = (source or "").strip()
        if not candidate:
            continue
        try:
            cmd = shlex.split(candidate)
        except ValueError as exc:
            return f"Cannot edit: invalid editor command {candidate!r}: {exc}"
        if cmd:
            return cmd
    return "Cannot edit: $EDITOR is not set."


def launch_editor(target: Path, configured: str | None = None) -> str | None:
    """Run the editor on ``target`` and block until it exits."""
    cmd = resolve_editor_command(configured)
    if isinstance(cmd, str):
        return cmd

    logger.info("launching editor %s on %s", cmd[0], target)
    try:
        completed = subprocess.run([*cmd, str(target)], check=False)
    except OSError as exc:
        return f"Failed to launch editor: {exc}"
    if completed.returncode != 0:
        logger.warning("editor exited with code %d", completed.returncode)
        return f"exit code {completed.returncode}"
    return None
