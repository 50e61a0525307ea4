"""Entry point for the arc lint LSP server."""

import sys

from arclsp.cli import run


def main() -> None:
    """Start the LSP server with command-line configuration."""
    sys.exit(run())


if __name__ == "__main__":
    main()
