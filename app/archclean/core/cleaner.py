"""Interactive cleanup orchestration.

Runs the fixed sequence of cleanup steps (package cache, orphaned
dependencies, stale configuration files, system journals), each behind
its own yes/no gate, then prints the current disk and memory status.

Any failing tool aborts the whole run; completed steps are not rolled back.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from archclean.models.report import (
    CacheReport,
    ConfigCleanReport,
    JournalReport,
    OrphanReport,
    RunReport,
    SystemStatus,
)
from archclean.utils.formatting import (
    console,
    format_disk_usage,
    format_memory_usage,
    print_header,
    print_success,
    print_warning,
)

if TYPE_CHECKING:
    from archclean.core.config import CleanerConfig
    from archclean.core.prompts import Confirmer
    from archclean.system.base import SystemCommands

logger = logging.getLogger(__name__)

# Categories listed in the closing summary, whether or not they ran
SUMMARY_LINES: tuple[str, ...] = (
    "Pacman cache cleaned and optimized",
    "Unused dependencies removed",
    "Old configuration files cleaned",
    "System journals optimized",
)


class CleanerError(Exception):
    """Base exception for cleanup errors."""


class PreconditionError(CleanerError):
    """Raised when the run cannot start; nothing has been changed."""


class PrivilegeError(PreconditionError):
    """Raised when the process is not running as root."""


class MissingDependencyError(PreconditionError):
    """Raised when required helper tools are missing and were not installed.

    Attributes:
        missing: Missing tool names mapped to their providing package.
    """

    def __init__(self, message: str, missing: dict[str, str]) -> None:
        super().__init__(message)
        self.missing = missing


class CleanupError(CleanerError):
    """Raised when a file selected for deletion cannot be removed."""


class Cleaner:
    """Runs the confirmation-gated cleanup steps.

    Args:
        config: Immutable settings for this run.
        system: Backend that executes the system tools.
        confirmer: Source of yes/no answers.

    Example:
        >>> cleaner = Cleaner(load_config(), ArchSystem(), TerminalConfirmer())
        >>> report = cleaner.run()
    """

    def __init__(
        self,
        config: CleanerConfig,
        system: SystemCommands,
        confirmer: Confirmer,
    ) -> None:
        self._config = config
        self._system = system
        self._confirmer = confirmer

    # =========================================================================
    # Preconditions
    # =========================================================================

    def check_privileges(self) -> None:
        """Ensure the process runs as root.

        Raises:
            PrivilegeError: If not running with administrative privileges.
        """
        if not self._system.is_privileged():
            msg = "Please run as root"
            raise PrivilegeError(msg)

    def check_dependencies(self) -> None:
        """Ensure every required helper tool is installed.

        Offers to install the providing packages when tools are missing.

        Raises:
            MissingDependencyError: If the user declines installation or
                tools are still missing afterwards.
            SystemCommandError: If the package installation fails.
        """
        missing = self._system.missing_tools(self._config.required_tools)
        if not missing:
            logger.debug("All required tools are available")
            return

        packages = sorted(set(missing.values()))
        print_warning(
            f"Missing required tools: {', '.join(sorted(missing))} "
            f"(packages: {', '.join(packages)})"
        )
        if not self._confirmer.confirm("Would you like to install them now?"):
            msg = "Cannot proceed without required packages."
            raise MissingDependencyError(msg, missing)

        self._system.install_packages(packages)

        still_missing = self._system.missing_tools(self._config.required_tools)
        if still_missing:
            msg = f"Still missing after installation: {', '.join(sorted(still_missing))}"
            raise MissingDependencyError(msg, still_missing)

    # =========================================================================
    # Cleanup steps
    # =========================================================================

    def clean_pacman_cache(self) -> CacheReport:
        """Prune the package cache, keeping recent versions of installed packages.

        Returns:
            CacheReport with the cache size before and after.
        """
        print_header("Cleaning Pacman Cache")
        cache_dir = self._config.pacman_cache_dir
        keep = self._config.cache_versions_to_keep

        initial_size = self._system.directory_size(cache_dir)

        console.print("Removing all cached versions of uninstalled packages...")
        self._system.prune_uninstalled_cache()

        console.print(f"Keeping only {keep} most recent versions of installed packages...")
        self._system.prune_installed_cache(keep)

        final_size = self._system.directory_size(cache_dir)

        print_success("Cache cleanup complete!")
        console.print(f"Initial size: {initial_size}")
        console.print(f"Final size: {final_size}")
        return CacheReport(initial_size=initial_size, final_size=final_size)

    def clean_unused_deps(self) -> OrphanReport:
        """Remove packages installed as dependencies that nothing requires.

        Returns:
            OrphanReport listing the removed packages (empty if none).
        """
        print_header("Removing Unused Dependencies")
        orphans = self._system.query_orphans()

        if not orphans:
            print_success("No unused dependencies found. Nothing to do.")
            return OrphanReport()

        console.print(f"Found {len(orphans)} unused package(s). Removing...")
        self._system.remove_packages(orphans)
        print_success("Removed unused packages successfully!")
        return OrphanReport(packages=tuple(orphans))

    def clean_old_configs(self) -> ConfigCleanReport:
        """Delete broken symlinks and confirmed backup files in user directories.

        Directories that do not exist are skipped silently.

        Returns:
            ConfigCleanReport whose removed_count is the number of deleted paths.

        Raises:
            CleanupError: If a selected path cannot be deleted.
        """
        print_header("Cleaning Old Configuration Files")
        report = ConfigCleanReport()

        for directory in self._config.config_dirs:
            if not directory.is_dir():
                logger.debug("Skipping missing directory %s", directory)
                continue
            console.print(f"Scanning {escape(str(directory))} for obsolete configurations...")
            report = report.merge(self._sweep_directory(directory, report))

        print_success(
            f"Removed {report.removed_count} obsolete configuration files and broken symlinks."
        )
        return report

    def clean_journals(self) -> JournalReport:
        """Vacuum the systemd journal by size, rotate it, then vacuum by age.

        Returns:
            JournalReport with the limits that were applied.
        """
        print_header("Optimizing System Journals")
        max_size = self._config.journal_max_size
        max_age = self._config.journal_max_age

        self._system.vacuum_journal_by_size(max_size)
        self._system.rotate_journal()
        self._system.vacuum_journal_by_age(max_age)

        print_success("Journal cleanup complete!")
        return JournalReport(max_size=max_size, max_age=max_age)

    def collect_status(self) -> SystemStatus:
        """Read current root filesystem and memory usage."""
        return SystemStatus(
            disk=self._system.disk_usage(Path("/")),
            memory=self._system.memory_usage(),
        )

    def display_summary(self) -> SystemStatus:
        """Print the offered cleanup categories and live system status.

        Returns:
            The SystemStatus that was printed.
        """
        print_header("System Cleanup Summary")
        for line in SUMMARY_LINES:
            console.print(f"- {line}")

        status = self.collect_status()
        print_status(status)
        return status

    # =========================================================================
    # Orchestration
    # =========================================================================

    def run(self) -> RunReport:
        """Check preconditions, run each confirmed step, then summarize.

        Returns:
            RunReport with the reports of the steps that ran.

        Raises:
            PreconditionError: If privileges or helper tools are missing.
            SystemCommandError: If any invoked tool fails.
            CleanupError: If a selected file cannot be deleted.
        """
        self.check_privileges()
        self.check_dependencies()

        report = RunReport()

        if self._ask("Clean pacman cache?", "cache", report):
            report.cache = self.clean_pacman_cache()
        if self._ask("Remove unused dependencies?", "orphans", report):
            report.orphans = self.clean_unused_deps()
        if self._ask("Clean old config files?", "configs", report):
            report.configs = self.clean_old_configs()
        if self._ask("Optimize system journals?", "journals", report):
            report.journals = self.clean_journals()

        report.status = self.display_summary()
        return report

    def _ask(self, prompt: str, step: str, report: RunReport) -> bool:
        """Gate a step on confirmation, recording declined steps."""
        if self._confirmer.confirm(prompt):
            return True
        logger.info("Step '%s' declined", step)
        report.declined.append(step)
        return False

    def _sweep_directory(self, directory: Path, so_far: ConfigCleanReport) -> ConfigCleanReport:
        """Clean one existing directory tree.

        Args:
            directory: Directory to sweep.
            so_far: Results from earlier directories. Paths already removed
                or kept there are neither counted nor asked about again
                when configured trees overlap.

        Returns:
            ConfigCleanReport for this directory only.
        """
        seen: set[Path] = {
            *so_far.removed_symlinks,
            *so_far.removed_backups,
            *so_far.skipped_backups,
        }
        removed_symlinks: list[Path] = []
        removed_backups: list[Path] = []
        skipped: list[Path] = []

        for link in self._system.find_broken_symlinks(directory):
            if link in seen:
                continue
            if self._delete(link):
                seen.add(link)
                removed_symlinks.append(link)
                console.print(f"[removed]Removed broken symlink:[/] {escape(str(link))}")

        for candidate in self._system.find_by_suffix(directory, self._config.backup_suffixes):
            if candidate in seen or not candidate.is_file():
                continue
            console.print(f"Found potential obsolete file: {escape(str(candidate))}")
            if not self._confirmer.confirm("Remove this file?"):
                seen.add(candidate)
                skipped.append(candidate)
                continue
            if self._delete(candidate):
                seen.add(candidate)
                removed_backups.append(candidate)
                console.print(f"[removed]Removed:[/] {escape(str(candidate))}")

        return ConfigCleanReport(
            removed_symlinks=tuple(removed_symlinks),
            removed_backups=tuple(removed_backups),
            skipped_backups=tuple(skipped),
        )

    def _delete(self, path: Path) -> bool:
        """Unlink a file or symlink.

        Returns:
            True if the path was removed, False if it had already vanished.

        Raises:
            CleanupError: If the path exists but cannot be removed.
        """
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug("Path vanished before deletion: %s", path)
            return False
        except OSError as e:
            msg = f"Failed to remove {path}: {e}"
            raise CleanupError(msg) from e
        logger.info("Deleted %s", path)
        return True


def print_status(status: SystemStatus) -> None:
    """Print the ``Current System Status`` block."""
    console.print("\n[bold_header]Current System Status:[/]")
    console.print(format_disk_usage(status.disk))
    console.print(format_memory_usage(status.memory))
