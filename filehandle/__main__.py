"""Module entrypoint for ``python -m filehandle``.

All argument parsing happens in ``filehandle.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
