"""Module entrypoint for ``python -m quickfm``.

Behaves exactly like the ``quickfm`` console script.
"""

from .cli import main


if __name__ == "__main__":
    raise SystemExit(main())
