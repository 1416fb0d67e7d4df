"""Arch Linux implementation of the system command interface.

Drives pacman, paccache, journalctl, find, du, df and free. Read-only
queries capture output; mutating tools inherit the terminal so their
progress output and prompts reach the user.
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path

from archclean.models.report import DiskUsage, MemoryUsage
from archclean.system.base import SystemCommandError, SystemCommands
from archclean.system.parsing import parse_df, parse_du_size, parse_free, split_null_terminated
from archclean.utils.shell import CommandResult, command_exists, is_root, run_command, run_interactive

logger = logging.getLogger(__name__)


class ArchSystem(SystemCommands):
    """SystemCommands backed by the real Arch Linux tools.

    Assumes the process already runs as root; no sudo is prepended.
    """

    def is_privileged(self) -> bool:
        """Check for an effective uid of 0."""
        return is_root()

    def missing_tools(self, required: Mapping[str, str]) -> dict[str, str]:
        """Return tools from ``required`` that are not on PATH."""
        return {tool: package for tool, package in required.items() if not command_exists(tool)}

    def install_packages(self, packages: Iterable[str]) -> None:
        """Install packages with ``pacman -S --needed``.

        pacman asks its own confirmation, so the command runs attached
        to the terminal.
        """
        self._run_attached(["pacman", "-S", "--needed", *packages])

    def directory_size(self, path: Path) -> str:
        """Return ``du -sh`` size of ``path``."""
        result = self._query(["du", "-sh", str(path)])
        return parse_du_size(result.stdout)

    def prune_uninstalled_cache(self) -> None:
        """Run ``paccache -ruk0``."""
        self._run_attached(["paccache", "-ruk0"])

    def prune_installed_cache(self, keep: int) -> None:
        """Run ``paccache -rk<keep>``."""
        if keep < 0:
            msg = f"Number of cached versions to keep must be >= 0, got {keep}"
            raise ValueError(msg)
        self._run_attached(["paccache", f"-rk{keep}"])

    def query_orphans(self) -> list[str]:
        """List orphaned dependencies with ``pacman -Qtdq``.

        pacman exits with status 1 and prints nothing when no package
        matches, which is not an error here. Status 1 with diagnostics
        (e.g. a locked database) is a failure.
        """
        args = ["pacman", "-Qtdq"]
        result = run_command(args)
        if result.returncode == 1 and not result.stdout.strip() and not result.stderr.strip():
            logger.debug("pacman reported no orphaned dependencies")
            return []
        if not result.success:
            raise SystemCommandError(args, result.returncode, result.stderr)
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]

    def remove_packages(self, packages: Iterable[str]) -> None:
        """Run ``pacman -Rns --noconfirm`` for the given packages."""
        names = list(packages)
        if not names:
            return
        self._run_attached(["pacman", "-Rns", "--noconfirm", *names])

    def find_broken_symlinks(self, directory: Path) -> list[Path]:
        """Find dangling symlinks with ``find -xtype l``."""
        return self._find([str(directory), "-xtype", "l"], directory)

    def find_by_suffix(self, directory: Path, suffixes: Iterable[str]) -> list[Path]:
        """Find regular files named ``*<suffix>`` for any of ``suffixes``."""
        name_tests: list[str] = []
        for suffix in suffixes:
            if name_tests:
                name_tests.append("-o")
            name_tests.extend(["-name", f"*{suffix}"])
        if not name_tests:
            return []
        return self._find([str(directory), "(", *name_tests, ")", "-type", "f"], directory)

    def vacuum_journal_by_size(self, max_size: str) -> None:
        """Run ``journalctl --vacuum-size``."""
        self._run_attached(["journalctl", f"--vacuum-size={max_size}"])

    def rotate_journal(self) -> None:
        """Run ``journalctl --rotate``."""
        self._run_attached(["journalctl", "--rotate"])

    def vacuum_journal_by_age(self, max_age: str) -> None:
        """Run ``journalctl --vacuum-time``."""
        self._run_attached(["journalctl", f"--vacuum-time={max_age}"])

    def disk_usage(self, mount_point: Path = Path("/")) -> DiskUsage:
        """Parse ``df -hP`` for ``mount_point``."""
        result = self._query(["df", "-hP", str(mount_point)])
        return parse_df(result.stdout)

    def memory_usage(self) -> MemoryUsage:
        """Parse ``free -h``."""
        result = self._query(["free", "-h"])
        return parse_free(result.stdout)

    def _query(self, args: list[str]) -> CommandResult:
        """Run a read-only command and capture its output.

        Raises:
            SystemCommandError: If the command exits non-zero.
        """
        logger.debug("Running %s", " ".join(args))
        result = run_command(args)
        if not result.success:
            raise SystemCommandError(args, result.returncode, result.stderr)
        return result

    def _run_attached(self, args: list[str]) -> None:
        """Run a mutating command attached to the terminal.

        Raises:
            SystemCommandError: If the command exits non-zero.
        """
        logger.info("Executing %s", " ".join(args))
        returncode = run_interactive(args)
        if returncode != 0:
            raise SystemCommandError(args, returncode)

    def _find(self, expression: list[str], directory: Path) -> list[Path]:
        """Run ``find`` with ``-print0`` and return the matched paths.

        Unreadable subtrees make find exit non-zero while still printing
        every match it could reach. Those diagnostics are logged and the
        partial result is returned.
        """
        args = ["find", *expression, "-print0"]
        logger.debug("Running %s", " ".join(args))
        result = run_command(args)
        if not result.success:
            logger.warning(
                "find reported problems under %s: %s",
                directory,
                result.stderr.strip() or f"exit status {result.returncode}",
            )
        return [Path(entry) for entry in split_null_terminated(result.stdout)]
