"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules, including
an in-memory SystemCommands fake that records every call it receives.
"""

import os
from collections.abc import Iterable, Mapping
from pathlib import Path

import pytest
from archclean.core.config import CleanerConfig
from archclean.models.report import DiskUsage, MemoryUsage
from archclean.system.base import SystemCommandError, SystemCommands


class FakeSystem(SystemCommands):
    """SystemCommands fake.

    File discovery walks the real (tmp_path) filesystem; everything else
    only records the call. Set ``fail_on`` to a method name to make that
    method raise SystemCommandError.
    """

    def __init__(
        self,
        *,
        privileged: bool = True,
        missing: Mapping[str, str] | None = None,
        orphans: Iterable[str] = (),
        fail_on: str | None = None,
        sizes: Iterable[str] = ("1.2G", "300M"),
    ) -> None:
        self.privileged = privileged
        self.missing = dict(missing or {})
        self.orphans = list(orphans)
        self.fail_on = fail_on
        self._sizes = list(sizes)
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, args))
        if self.fail_on == name:
            raise SystemCommandError([name], 1, f"{name} failed")

    @property
    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def is_privileged(self) -> bool:
        return self.privileged

    def missing_tools(self, required: Mapping[str, str]) -> dict[str, str]:
        self._record("missing_tools")
        return {tool: pkg for tool, pkg in self.missing.items() if tool in required}

    def install_packages(self, packages: Iterable[str]) -> None:
        names = list(packages)
        self._record("install_packages", names)
        self.missing = {t: p for t, p in self.missing.items() if p not in names}

    def directory_size(self, path: Path) -> str:
        self._record("directory_size", path)
        return self._sizes.pop(0) if self._sizes else "0"

    def prune_uninstalled_cache(self) -> None:
        self._record("prune_uninstalled_cache")

    def prune_installed_cache(self, keep: int) -> None:
        self._record("prune_installed_cache", keep)

    def query_orphans(self) -> list[str]:
        self._record("query_orphans")
        return list(self.orphans)

    def remove_packages(self, packages: Iterable[str]) -> None:
        self._record("remove_packages", list(packages))

    def find_broken_symlinks(self, directory: Path) -> list[Path]:
        self._record("find_broken_symlinks", directory)
        found: list[Path] = []
        for root, dirs, files in os.walk(directory):
            for name in sorted(dirs + files):
                path = Path(root) / name
                if path.is_symlink() and not path.exists():
                    found.append(path)
        return found

    def find_by_suffix(self, directory: Path, suffixes: Iterable[str]) -> list[Path]:
        suffix_list = tuple(suffixes)
        self._record("find_by_suffix", directory, suffix_list)
        found: list[Path] = []
        for root, _dirs, files in os.walk(directory):
            for name in sorted(files):
                path = Path(root) / name
                if not path.is_symlink() and path.is_file() and name.endswith(suffix_list):
                    found.append(path)
        return found

    def vacuum_journal_by_size(self, max_size: str) -> None:
        self._record("vacuum_journal_by_size", max_size)

    def rotate_journal(self) -> None:
        self._record("rotate_journal")

    def vacuum_journal_by_age(self, max_age: str) -> None:
        self._record("vacuum_journal_by_age", max_age)

    def disk_usage(self, mount_point: Path = Path("/")) -> DiskUsage:
        self._record("disk_usage", mount_point)
        return DiskUsage(
            filesystem="/dev/nvme0n1p2",
            size="468G",
            used="201G",
            available="244G",
            use_percent="46%",
            mount_point=str(mount_point),
        )

    def memory_usage(self) -> MemoryUsage:
        self._record("memory_usage")
        return MemoryUsage(total="31Gi", used="6.2Gi", free="18Gi", available="24Gi")


MUTATING_CALLS = frozenset(
    {
        "install_packages",
        "prune_uninstalled_cache",
        "prune_installed_cache",
        "remove_packages",
        "vacuum_journal_by_size",
        "rotate_journal",
        "vacuum_journal_by_age",
    }
)


@pytest.fixture
def fake_system() -> FakeSystem:
    """A privileged FakeSystem with every tool present and no orphans."""
    return FakeSystem()


@pytest.fixture
def make_fake_system() -> type[FakeSystem]:
    """The FakeSystem class, for tests that need custom settings."""
    return FakeSystem


@pytest.fixture
def mutating_calls() -> frozenset[str]:
    """Names of FakeSystem methods that would change the system."""
    return MUTATING_CALLS


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """An existing directory to sweep for stale files."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


@pytest.fixture
def cleaner_config(config_dir: Path, tmp_path: Path) -> CleanerConfig:
    """Config sweeping one existing and one missing directory."""
    return CleanerConfig(
        config_dirs=(config_dir, tmp_path / "does-not-exist"),
        pacman_cache_dir=tmp_path / "pkg",
    )


@pytest.fixture
def mock_df_output() -> str:
    """Sample df -hP / output."""
    return """Filesystem      Size  Used Avail Use% Mounted on
/dev/nvme0n1p2  468G  201G  244G  46% /
"""


@pytest.fixture
def mock_free_output() -> str:
    """Sample free -h output (procps-ng 4.x)."""
    return """               total        used        free      shared  buff/cache   available
Mem:            31Gi       6.2Gi        18Gi       1.1Gi       7.9Gi        24Gi
Swap:          8.0Gi          0B       8.0Gi
"""


@pytest.fixture
def mock_du_output() -> str:
    """Sample du -sh output for the pacman cache."""
    return "1.2G\t/var/cache/pacman/pkg\n"
