"""Command-line entry points."""

from windiris.cli.run_read import main

__all__ = ["main"]
