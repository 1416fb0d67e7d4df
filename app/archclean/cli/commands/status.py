"""Status command implementation.

Prints current root filesystem and memory usage without cleaning anything.
"""

import typer

from archclean.core.cleaner import print_status
from archclean.models.report import SystemStatus
from archclean.system.arch import ArchSystem
from archclean.system.base import SystemCommandError
from archclean.utils.formatting import print_error

app = typer.Typer(
    help="Show disk and memory usage.",
    invoke_without_command=True,
)


@app.callback()
def status() -> None:
    """Show root filesystem and memory usage. Does not require root."""
    system = ArchSystem()
    try:
        current = SystemStatus(disk=system.disk_usage(), memory=system.memory_usage())
    except (SystemCommandError, ValueError, FileNotFoundError) as e:
        print_error(f"Could not read system status: {e}")
        raise typer.Exit(code=1) from e

    print_status(current)
