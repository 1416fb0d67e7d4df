"""CLI commands for archclean.

This package contains all subcommand implementations.
"""

from archclean.cli.commands import clean, config, status

__all__ = ["clean", "config", "status"]
