"""Module entrypoint for ``python -m notepeek``."""

from .cli import main


if __name__ == "__main__":
    main()
