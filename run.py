"""Entry point for the passage-to-Markdown converter."""

from bg2md.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
