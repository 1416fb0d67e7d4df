"""Cleaner configuration and settings.

This module provides the configuration model and I/O functions for the
cleanup run: how many cached package versions to keep, journal limits,
and which user directories to sweep for stale files.

Configuration is stored in ~/.config/archclean/config.toml. A missing
file means defaults; the loaded value is immutable for the whole run.
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from archclean.core.paths import PACMAN_CACHE_DIR, default_scan_dirs, get_config_path

logger = logging.getLogger(__name__)

# journalctl accepts sizes with an optional K, M, G or T suffix
_SIZE_PATTERN = re.compile(r"^\d+[KMGT]?$")
# journalctl time spans such as 7d, 2weeks, 12h
_AGE_PATTERN = re.compile(r"^\d+(s|m|h|d|w|weeks?|months?|years?)$")

# Tool on PATH -> Arch package that provides it
DEFAULT_REQUIRED_TOOLS: dict[str, str] = {
    "paccache": "pacman-contrib",
    "find": "findutils",
    "journalctl": "systemd",
    "du": "coreutils",
    "df": "coreutils",
    "free": "procps-ng",
}

DEFAULT_BACKUP_SUFFIXES: tuple[str, ...] = (".old", ".bak", ".orig")


class CleanerConfig(BaseModel):
    """Configuration for one cleanup run.

    Attributes:
        cache_versions_to_keep: Cached versions kept per installed package.
        journal_max_size: Upper bound for archived journal files.
        journal_max_age: Archived journal entries older than this are removed.
        config_dirs: User directories swept for broken symlinks and backups.
        backup_suffixes: File name endings treated as stale backups.
        pacman_cache_dir: Package cache whose size is reported.
        required_tools: Helper tools that must be on PATH, mapped to the
            package that provides them.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    cache_versions_to_keep: Annotated[
        int,
        Field(ge=0, description="Cached versions to keep per installed package"),
    ] = 2
    journal_max_size: Annotated[
        str,
        Field(description="Maximum total size of archived journals, e.g. 500M"),
    ] = "500M"
    journal_max_age: Annotated[
        str,
        Field(description="Maximum age of archived journals, e.g. 7d"),
    ] = "7d"
    config_dirs: Annotated[
        tuple[Path, ...],
        Field(default_factory=default_scan_dirs, description="Directories to sweep"),
    ]
    backup_suffixes: Annotated[
        tuple[str, ...],
        Field(min_length=1, description="Suffixes marking stale backup files"),
    ] = DEFAULT_BACKUP_SUFFIXES
    pacman_cache_dir: Path = PACMAN_CACHE_DIR
    required_tools: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_REQUIRED_TOOLS)
    )

    @field_validator("journal_max_size")
    @classmethod
    def validate_journal_size(cls, v: str) -> str:
        """Accept journalctl size values such as ``500M``."""
        value = v.strip().upper()
        if not _SIZE_PATTERN.match(value):
            msg = f"journal_max_size must look like 500M or 1G, got '{v}'"
            raise ValueError(msg)
        return value

    @field_validator("journal_max_age")
    @classmethod
    def validate_journal_age(cls, v: str) -> str:
        """Accept journalctl time spans such as ``7d``."""
        value = v.strip()
        if not _AGE_PATTERN.match(value):
            msg = f"journal_max_age must look like 7d or 2weeks, got '{v}'"
            raise ValueError(msg)
        return value

    @field_validator("config_dirs", mode="before")
    @classmethod
    def expand_config_dirs(cls, v: object) -> object:
        """Expand ``~`` in configured directories."""
        if isinstance(v, (list, tuple)):
            return tuple(Path(str(item)).expanduser() for item in v)
        return v

    @field_validator("backup_suffixes")
    @classmethod
    def validate_suffixes(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Require non-empty suffixes without path separators."""
        for suffix in v:
            if not suffix or "/" in suffix:
                msg = f"Invalid backup suffix: '{suffix}'"
                raise ValueError(msg)
        return v


class ConfigError(Exception):
    """Base exception for cleaner configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> CleanerConfig:
    """Load cleaner configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated CleanerConfig. Defaults are used when the file is absent.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or its content is invalid.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config file at %s, using defaults", config_path)
        return CleanerConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        config = CleanerConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e

    logger.debug("Loaded config from %s", config_path)
    return config


def save_config(config: CleanerConfig, path: Path | None = None) -> Path:
    """Save cleaner configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The CleanerConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config.model_dump(mode="json")

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config {config_path}: {e}") from e

    return config_path
