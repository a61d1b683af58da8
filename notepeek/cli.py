"""Command-line front door for notepeek.

Parses CLI options, merges them over the persisted settings and either
lists the notes or starts the interactive browser.
"""

from __future__ import annotations

import argparse
import os
import signal
import sys
from pathlib import Path

from .app import run_browser
from .config import Settings, load_settings, save_settings
from .errors import TerminalError
from .logs import configure_logging
from .notes import FileNoteStore, NoteIndex
from .theme import available_theme_names


def _signal_exit(signum, _frame):
    """Turn SIGTERM/SIGHUP into SystemExit so the terminal is restored on the way out."""
    raise SystemExit(128 + signum)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notepeek",
        description="Browse a directory of notes in the terminal and open them in your editor.",
    )
    parser.add_argument(
        "notes_dir",
        nargs="?",
        default=None,
        help="Directory holding the notes. Defaults to the configured notes directory.",
    )
    parser.add_argument("--editor", default=None, help="Editor command (default: $VISUAL, then $EDITOR).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--style", default=None, help="Pygments style name for the preview.")
    parser.add_argument("--no-color", action="store_true", help="Disable colour output.")
    parser.add_argument("--list", action="store_true", help="Print note names and exit.")
    parser.add_argument("--save", action="store_true", help="Persist the given options as defaults.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    parser.add_argument("--verbose", action="store_true", help="Log debug detail.")
    return parser


def resolve_settings(args: argparse.Namespace, base: Settings | None = None) -> Settings:
    """Apply command-line overrides on top of the persisted settings."""
    settings = base if base is not None else load_settings()
    notes_dir = Path(args.notes_dir).expanduser() if args.notes_dir else None
    return settings.with_overrides(
        notes_dir=notes_dir,
        editor=args.editor,
        theme=args.theme,
        style=args.style,
    )


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run notepeek."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file, verbose=args.verbose)
    settings = resolve_settings(args)

    if args.save:
        save_settings(settings)

    notes_dir = settings.notes_dir
    if not notes_dir.is_dir():
        raise SystemExit(f"Notes directory not found: {notes_dir}")

    index = NoteIndex.scan(notes_dir, settings.extension)
    labels = index.labels()
    if args.list:
        for label in labels:
            sys.stdout.write(f"{label}\n")
        return

    if not (os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())):
        raise SystemExit("notepeek needs an interactive terminal (use --list to print notes).")

    signal.signal(signal.SIGTERM, _signal_exit)
    signal.signal(signal.SIGHUP, _signal_exit)

    try:
        run_browser(
            settings,
            no_color=args.no_color,
            backend=FileNoteStore(index),
            labels=labels,
        )
    except TerminalError as exc:
        raise SystemExit(str(exc)) from exc


if __name__ == "__main__":
    main()
