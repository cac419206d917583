"""Module entrypoint for ``python -m repofix``.

All argument parsing and session setup happen in ``repofix.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
