"""Main CLI application entry point.

Defines the Typer application and global options. Invoked without a
subcommand, archclean runs the interactive cleanup.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from archclean import __version__
from archclean.cli.commands import clean, config, status

# Create main Typer app
app = typer.Typer(
    name="archclean",
    help="Interactive disk cleanup for Arch Linux.",
    invoke_without_command=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"archclean version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml (default: ~/.config/archclean/config.toml).",
        ),
    ] = None,
    assume_no: Annotated[
        bool,
        typer.Option(
            "--assume-no",
            help="Decline every prompt (nothing is changed).",
        ),
    ] = False,
) -> None:
    """archclean - interactive disk cleanup for Arch Linux.

    Prunes the pacman cache, removes unused dependencies, cleans old
    configuration files and vacuums the systemd journal. Each step asks
    for confirmation first.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path
    ctx.obj["assume_no"] = assume_no

    if ctx.invoked_subcommand is None:
        clean.run_cleanup(config_path=config_path, assume_no=assume_no)


# Register commands
app.add_typer(clean.app, name="clean")
app.add_typer(config.app, name="config")
app.add_typer(status.app, name="status")


if __name__ == "__main__":
    app()
