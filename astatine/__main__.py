"""Module entrypoint for ``python -m astatine``.

This keeps module-mode execution behavior identical to the CLI script.
Argument parsing and session setup happen in ``astatine.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
