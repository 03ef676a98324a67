"""Module entrypoint for ``python -m binocular``."""

from .cli import main


if __name__ == "__main__":
    main()
