"""Entry point for ``python -m interactions``."""

from interactions.cli import main

if __name__ == "__main__":
    main()
