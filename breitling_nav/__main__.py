"""Entrypoint for `python -m breitling_nav`."""

from .cli import main


if __name__ == "__main__":
    main()
