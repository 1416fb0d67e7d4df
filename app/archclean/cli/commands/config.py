"""Configuration commands.

Provides commands to show the effective cleaner configuration and to
write a default config file for editing.
"""

from pathlib import Path
from typing import Annotated

import typer

from archclean.core.config import CleanerConfig, ConfigError, load_config, save_config
from archclean.core.paths import get_config_path
from archclean.utils.formatting import (
    console,
    create_settings_table,
    print_error,
    print_info,
    print_success,
)

app = typer.Typer(
    help="Show or create the cleaner configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _resolve_path(ctx: typer.Context) -> Path:
    """Return the config path chosen with --config, or the default."""
    obj = ctx.obj or {}
    return obj.get("config_path") or get_config_path()


@app.command()
def show(ctx: typer.Context) -> None:
    """Show the effective configuration (defaults merged with the config file)."""
    path = _resolve_path(ctx)
    try:
        config = load_config(path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    source = str(path) if path.exists() else "built-in defaults"
    table = create_settings_table(title=f"Configuration ({source})")
    table.add_row("cache_versions_to_keep", str(config.cache_versions_to_keep))
    table.add_row("journal_max_size", config.journal_max_size)
    table.add_row("journal_max_age", config.journal_max_age)
    table.add_row("pacman_cache_dir", str(config.pacman_cache_dir))
    table.add_row("config_dirs", "\n".join(str(d) for d in config.config_dirs))
    table.add_row("backup_suffixes", ", ".join(config.backup_suffixes))
    table.add_row(
        "required_tools",
        "\n".join(f"{tool} ({pkg})" for tool, pkg in sorted(config.required_tools.items())),
    )
    console.print(table)


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file containing the default settings."""
    path = _resolve_path(ctx)
    if path.exists() and not force:
        print_error(f"Config already exists: {path}")
        print_info("Use --force to overwrite it.")
        raise typer.Exit(code=1)

    try:
        saved = save_config(CleanerConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {saved}")


@app.command("path")
def show_path(ctx: typer.Context) -> None:
    """Print the config file location."""
    typer.echo(str(_resolve_path(ctx)))
