"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from archclean.core.theme import get_theme

if TYPE_CHECKING:
    from archclean.models.report import DiskUsage, MemoryUsage


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def create_settings_table(title: str = "Configuration") -> Table:
    """Create a two-column key/value table for configuration display.

    Args:
        title: Table title.

    Returns:
        Rich Table with Setting and Value columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("Setting", style="text", no_wrap=True)
    table.add_column("Value", style="info")
    return table


def format_disk_usage(disk: DiskUsage) -> str:
    """Format root filesystem usage as a single status line."""
    return (
        f"Disk ({disk.mount_point}): [info]{disk.used}[/] used of {disk.size} "
        f"({disk.use_percent}), [success]{disk.available}[/] available "
        f"[muted]on {disk.filesystem}[/]"
    )


def format_memory_usage(memory: MemoryUsage) -> str:
    """Format memory usage the way the status summary prints it."""
    return f"Memory: [info]{memory.used}[/]/{memory.total}"


def print_header(title: str) -> None:
    """Print a step banner, e.g. ``=== Cleaning Pacman Cache ===``."""
    console.print(f"\n[bold_header]=== {title} ===[/]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
