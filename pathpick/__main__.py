"""Module entrypoint for ``python -m pathpick``.

Argument parsing and runtime setup happen in ``pathpick.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
