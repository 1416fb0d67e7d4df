"""Clean command implementation.

Runs the interactive cleanup: package cache, unused dependencies,
old configuration files and system journals, each behind a prompt.
"""

from pathlib import Path
from typing import Annotated

import typer

from archclean.core.cleaner import Cleaner, CleanupError, PreconditionError
from archclean.core.config import ConfigError, load_config
from archclean.core.prompts import Confirmer, DecliningConfirmer, TerminalConfirmer
from archclean.system.arch import ArchSystem
from archclean.system.base import SystemCommandError
from archclean.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Run the interactive cleanup.",
    invoke_without_command=True,
)


@app.callback()
def clean(
    ctx: typer.Context,
    assume_no: Annotated[
        bool,
        typer.Option(
            "--assume-no",
            help="Decline every prompt (nothing is changed).",
        ),
    ] = False,
) -> None:
    """Clean pacman cache, unused dependencies, old configs and journals.

    Every step asks for confirmation first and defaults to "no".
    Must be run as root.
    """
    if ctx.invoked_subcommand is not None:
        return

    obj = ctx.obj or {}
    run_cleanup(
        config_path=obj.get("config_path"),
        assume_no=assume_no or obj.get("assume_no", False),
    )


def run_cleanup(config_path: Path | None = None, assume_no: bool = False) -> None:
    """Load configuration and run the cleanup, mapping failures to exit codes.

    Args:
        config_path: Config file to load. None uses the default location.
        assume_no: Decline every prompt instead of asking on the terminal.

    Raises:
        typer.Exit: With code 1 on precondition or config errors, or the
            failing tool's exit status when a command fails.
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    confirmer: Confirmer = DecliningConfirmer() if assume_no else TerminalConfirmer()
    cleaner = Cleaner(config, ArchSystem(), confirmer)

    console.print("[bold_header]=== ArchCleaner - Advanced System Cleanup Utility ===[/]")

    try:
        report = cleaner.run()
    except PreconditionError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    except SystemCommandError as e:
        print_error(str(e))
        raise typer.Exit(code=e.returncode if e.returncode > 0 else 1) from e
    except (CleanupError, ValueError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not report.anything_ran:
        print_info("No cleanup steps were selected.")
