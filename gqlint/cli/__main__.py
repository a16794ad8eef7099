#!/usr/bin/env python3
"""Entry point for the gqlint CLI when run as python -m gqlint.cli."""

if __name__ == "__main__":
    from gqlint.cli.main import main

    main()
