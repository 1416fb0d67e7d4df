"""Abstract interface to the system tools archclean drives.

Every external capability the cleaner needs is one method here, so the
orchestrator never builds a command line itself and tests can swap in
a fake that records calls instead of touching the system.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path

from archclean.models.report import DiskUsage, MemoryUsage


class SystemCommandError(RuntimeError):
    """Raised when an external tool exits with a failure status.

    Attributes:
        args_: The command line that failed.
        returncode: Exit status of the tool.
        stderr: Captured diagnostics, empty when output went to the terminal.
    """

    def __init__(self, args: list[str], returncode: int, stderr: str = "") -> None:
        self.args_ = args
        self.returncode = returncode
        self.stderr = stderr
        detail = f": {stderr.strip()}" if stderr.strip() else ""
        super().__init__(f"'{' '.join(args)}' exited with status {returncode}{detail}")


class SystemCommands(ABC):
    """One method per external capability used by the cleaner.

    Example:
        >>> system = ArchSystem()
        >>> for pkg in system.query_orphans():
        ...     print(pkg)
    """

    # --- preconditions ---

    @abstractmethod
    def is_privileged(self) -> bool:
        """Return True if the process may modify system state."""

    @abstractmethod
    def missing_tools(self, required: Mapping[str, str]) -> dict[str, str]:
        """Return the subset of ``required`` (tool -> package) not found on PATH."""

    @abstractmethod
    def install_packages(self, packages: Iterable[str]) -> None:
        """Install packages with the system package manager.

        Raises:
            SystemCommandError: If the installation fails or is cancelled.
        """

    # --- package cache ---

    @abstractmethod
    def directory_size(self, path: Path) -> str:
        """Return the human-readable total size of a directory tree."""

    @abstractmethod
    def prune_uninstalled_cache(self) -> None:
        """Remove every cached version of packages that are no longer installed."""

    @abstractmethod
    def prune_installed_cache(self, keep: int) -> None:
        """Keep only the ``keep`` most recent cached versions of installed packages."""

    # --- orphaned dependencies ---

    @abstractmethod
    def query_orphans(self) -> list[str]:
        """Return packages installed as dependencies that nothing requires."""

    @abstractmethod
    def remove_packages(self, packages: Iterable[str]) -> None:
        """Remove packages with their unneeded dependencies, without prompting."""

    # --- file discovery ---

    @abstractmethod
    def find_broken_symlinks(self, directory: Path) -> list[Path]:
        """Return symlinks under ``directory`` whose target does not exist."""

    @abstractmethod
    def find_by_suffix(self, directory: Path, suffixes: Iterable[str]) -> list[Path]:
        """Return regular files under ``directory`` whose name ends in a suffix."""

    # --- journal ---

    @abstractmethod
    def vacuum_journal_by_size(self, max_size: str) -> None:
        """Shrink archived journal files to at most ``max_size`` in total."""

    @abstractmethod
    def rotate_journal(self) -> None:
        """Archive the active journal files."""

    @abstractmethod
    def vacuum_journal_by_age(self, max_age: str) -> None:
        """Delete archived journal entries older than ``max_age``."""

    # --- status ---

    @abstractmethod
    def disk_usage(self, mount_point: Path = Path("/")) -> DiskUsage:
        """Return usage of the filesystem holding ``mount_point``."""

    @abstractmethod
    def memory_usage(self) -> MemoryUsage:
        """Return current memory usage."""
