"""Module entrypoint for ``python -m layertree``.

All argument parsing and replay happen in ``layertree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
