"""XDG-compliant path management for archclean.

archclean only reads configuration; it keeps no state or cache of its own.

XDG defaults:
- Config: ~/.config/archclean/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "archclean"

# Where pacman keeps downloaded package archives
PACMAN_CACHE_DIR = Path("/var/cache/pacman/pkg")


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/archclean/ (or XDG_CONFIG_HOME/archclean/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default cleaner configuration file path.

    Returns:
        Path to ~/.config/archclean/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/archclean/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def default_scan_dirs() -> tuple[Path, ...]:
    """Get the user directories scanned for stale configuration.

    Returns:
        ~/.config, ~/.cache and ~/.local/share of the current user.
    """
    home = Path.home()
    return (home / ".config", home / ".cache", home / ".local" / "share")
