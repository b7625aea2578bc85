"""Allow ``python -m dnsswitcher``."""

from dnsswitcher.cli import main

if __name__ == "__main__":
    main()
