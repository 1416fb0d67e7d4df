"""CLI package for archclean.

This package contains the Typer application and all subcommands.
"""

from archclean.cli.main import app

__all__ = ["app"]
