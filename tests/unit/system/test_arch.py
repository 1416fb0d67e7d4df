"""Unit tests for ArchSystem.

Every command is mocked; the tests assert on the command lines built
and on how exit statuses are interpreted.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from archclean.system.arch import ArchSystem
from archclean.system.base import SystemCommandError
from archclean.utils.shell import CommandResult


@pytest.fixture
def system() -> ArchSystem:
    """Create ArchSystem instance."""
    return ArchSystem()


class TestPreconditions:
    """Tests for privilege and tool checks."""

    def test_is_privileged_uses_euid(self, system: ArchSystem) -> None:
        """is_privileged reflects the effective uid check."""
        with patch("archclean.system.arch.is_root", return_value=False):
            assert system.is_privileged() is False

    def test_missing_tools(self, system: ArchSystem) -> None:
        """Only tools absent from PATH are reported."""
        required = {"paccache": "pacman-contrib", "find": "findutils"}

        with patch("archclean.system.arch.command_exists", side_effect=lambda t: t == "find"):
            assert system.missing_tools(required) == {"paccache": "pacman-contrib"}

    def test_install_packages(self, system: ArchSystem) -> None:
        """Installation goes through pacman -S --needed on the terminal."""
        with patch("archclean.system.arch.run_interactive", return_value=0) as mock_run:
            system.install_packages(["pacman-contrib"])

        mock_run.assert_called_once_with(["pacman", "-S", "--needed", "pacman-contrib"])

    def test_install_failure_raises(self, system: ArchSystem) -> None:
        """A failed or cancelled installation raises SystemCommandError."""
        with (
            patch("archclean.system.arch.run_interactive", return_value=1),
            pytest.raises(SystemCommandError) as exc_info,
        ):
            system.install_packages(["pacman-contrib"])

        assert exc_info.value.returncode == 1


class TestCache:
    """Tests for package cache commands."""

    def test_directory_size(self, system: ArchSystem, mock_du_output: str) -> None:
        """directory_size parses du -sh."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=mock_du_output, stderr="", returncode=0)

            size = system.directory_size(Path("/var/cache/pacman/pkg"))

        assert size == "1.2G"
        assert mock_run.call_args[0][0] == ["du", "-sh", "/var/cache/pacman/pkg"]
        assert mock_run.call_args.kwargs == {}

    def test_prune_commands(self, system: ArchSystem) -> None:
        """paccache is called with -ruk0 and then -rk<N>."""
        with patch("archclean.system.arch.run_interactive", return_value=0) as mock_run:
            system.prune_uninstalled_cache()
            system.prune_installed_cache(2)

        assert [c[0][0] for c in mock_run.call_args_list] == [
            ["paccache", "-ruk0"],
            ["paccache", "-rk2"],
        ]

    def test_negative_keep_rejected(self, system: ArchSystem) -> None:
        """A negative retention count never reaches paccache."""
        with (
            patch("archclean.system.arch.run_interactive") as mock_run,
            pytest.raises(ValueError),
        ):
            system.prune_installed_cache(-1)

        mock_run.assert_not_called()

    def test_prune_failure_raises(self, system: ArchSystem) -> None:
        """A failing paccache raises with its exit status."""
        with (
            patch("archclean.system.arch.run_interactive", return_value=3),
            pytest.raises(SystemCommandError, match="paccache -ruk0"),
        ):
            system.prune_uninstalled_cache()


class TestOrphans:
    """Tests for orphan query and removal."""

    def test_query_orphans(self, system: ArchSystem) -> None:
        """Each output line is one package."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="python-six\nlibfoo\n", stderr="", returncode=0
            )

            assert system.query_orphans() == ["python-six", "libfoo"]

        assert mock_run.call_args[0][0] == ["pacman", "-Qtdq"]

    def test_query_orphans_none_found(self, system: ArchSystem) -> None:
        """pacman's exit status 1 with no output means no orphans."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=1)

            assert system.query_orphans() == []

    def test_query_orphans_real_failure(self, system: ArchSystem) -> None:
        """Other failures (e.g. a locked database) raise."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="", stderr="error: could not open database", returncode=1
            )

            with pytest.raises(SystemCommandError, match="could not open database") as exc_info:
                system.query_orphans()

        assert exc_info.value.returncode == 1

    def test_query_orphans_locked_database(self, system: ArchSystem) -> None:
        """A held database lock is not mistaken for an empty result."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="",
                stderr="error: failed to init transaction (unable to lock database)\n",
                returncode=1,
            )

            with pytest.raises(SystemCommandError, match="unable to lock database"):
                system.query_orphans()

    def test_remove_packages(self, system: ArchSystem) -> None:
        """Removal is recursive, removes configs and does not prompt."""
        with patch("archclean.system.arch.run_interactive", return_value=0) as mock_run:
            system.remove_packages(["python-six", "libfoo"])

        mock_run.assert_called_once_with(
            ["pacman", "-Rns", "--noconfirm", "python-six", "libfoo"]
        )

    def test_remove_nothing(self, system: ArchSystem) -> None:
        """An empty removal list runs nothing."""
        with patch("archclean.system.arch.run_interactive") as mock_run:
            system.remove_packages([])

        mock_run.assert_not_called()


class TestFind:
    """Tests for file discovery."""

    def test_find_broken_symlinks(self, system: ArchSystem) -> None:
        """Broken symlinks are found with -xtype l and -print0."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="/home/u/.config/a\0/home/u/.config/b c\0", stderr="", returncode=0
            )

            result = system.find_broken_symlinks(Path("/home/u/.config"))

        assert result == [Path("/home/u/.config/a"), Path("/home/u/.config/b c")]
        assert mock_run.call_args[0][0] == [
            "find",
            "/home/u/.config",
            "-xtype",
            "l",
            "-print0",
        ]

    def test_find_by_suffix_expression(self, system: ArchSystem) -> None:
        """Suffixes are OR-ed name tests restricted to regular files."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

            system.find_by_suffix(Path("/d"), (".old", ".bak", ".orig"))

        assert mock_run.call_args[0][0] == [
            "find", "/d",
            "(", "-name", "*.old", "-o", "-name", "*.bak", "-o", "-name", "*.orig", ")",
            "-type", "f", "-print0",
        ]  # fmt: skip

    def test_find_partial_failure_keeps_results(self, system: ArchSystem) -> None:
        """Permission errors in subtrees are logged, found paths are kept."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(
                stdout="/d/x.bak\0",
                stderr="find: '/d/private': Permission denied",
                returncode=1,
            )

            result = system.find_by_suffix(Path("/d"), (".bak",))

        assert result == [Path("/d/x.bak")]

    def test_find_runs_without_timeout(self, system: ArchSystem) -> None:
        """Walks over large home directories are allowed to finish."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="", returncode=0)

            system.find_broken_symlinks(Path("/home/u/.local/share"))

        assert mock_run.call_args.kwargs == {}


class TestJournal:
    """Tests for journal maintenance."""

    def test_journal_commands(self, system: ArchSystem) -> None:
        """journalctl receives size, rotate and time options."""
        with patch("archclean.system.arch.run_interactive", return_value=0) as mock_run:
            system.vacuum_journal_by_size("500M")
            system.rotate_journal()
            system.vacuum_journal_by_age("7d")

        assert [c[0][0] for c in mock_run.call_args_list] == [
            ["journalctl", "--vacuum-size=500M"],
            ["journalctl", "--rotate"],
            ["journalctl", "--vacuum-time=7d"],
        ]


class TestStatus:
    """Tests for disk and memory queries."""

    def test_disk_usage(self, system: ArchSystem, mock_df_output: str) -> None:
        """disk_usage runs df -hP on the mount point."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=mock_df_output, stderr="", returncode=0)

            disk = system.disk_usage()

        assert disk.used == "201G"
        assert mock_run.call_args[0][0] == ["df", "-hP", "/"]

    def test_memory_usage(self, system: ArchSystem, mock_free_output: str) -> None:
        """memory_usage parses free -h."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout=mock_free_output, stderr="", returncode=0)

            assert system.memory_usage().total == "31Gi"

    def test_query_failure_raises(self, system: ArchSystem) -> None:
        """A failing df raises SystemCommandError."""
        with patch("archclean.system.arch.run_command") as mock_run:
            mock_run.return_value = CommandResult(stdout="", stderr="df: boom", returncode=1)

            with pytest.raises(SystemCommandError, match="df: boom"):
                system.disk_usage()
