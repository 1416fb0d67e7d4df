"""Result models returned by cleanup steps.

Every cleanup step returns one of these immutable values instead of
mutating shared counters, so the caller decides what to print and
what to aggregate.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CacheReport:
    """Package cache size before and after pruning.

    Attributes:
        initial_size: Human-readable size reported by ``du -sh`` before pruning.
        final_size: Human-readable size reported by ``du -sh`` after pruning.
    """

    initial_size: str
    final_size: str


@dataclass(frozen=True, slots=True)
class OrphanReport:
    """Orphaned dependencies that were removed.

    Attributes:
        packages: Package names passed to ``pacman -Rns``. Empty when
            nothing needed removing.
    """

    packages: tuple[str, ...] = ()

    @property
    def nothing_to_do(self) -> bool:
        """True when no orphaned dependency was found."""
        return not self.packages


@dataclass(frozen=True, slots=True)
class ConfigCleanReport:
    """Outcome of the stale-configuration sweep.

    Attributes:
        removed_symlinks: Broken symlinks deleted without asking.
        removed_backups: Backup-suffix files deleted after confirmation.
        skipped_backups: Backup-suffix files the user chose to keep.
    """

    removed_symlinks: tuple[Path, ...] = ()
    removed_backups: tuple[Path, ...] = ()
    skipped_backups: tuple[Path, ...] = ()

    def __post_init__(self) -> None:
        """Reject reports that would count a path twice."""
        removed = (*self.removed_symlinks, *self.removed_backups)
        if len(set(removed)) != len(removed):
            msg = "A removed path cannot be counted more than once"
            raise ValueError(msg)

    @property
    def removed_count(self) -> int:
        """Number of paths actually deleted."""
        return len(self.removed_symlinks) + len(self.removed_backups)

    def merge(self, other: "ConfigCleanReport") -> "ConfigCleanReport":
        """Combine the results of two directory sweeps."""
        return ConfigCleanReport(
            removed_symlinks=(*self.removed_symlinks, *other.removed_symlinks),
            removed_backups=(*self.removed_backups, *other.removed_backups),
            skipped_backups=(*self.skipped_backups, *other.skipped_backups),
        )


@dataclass(frozen=True, slots=True)
class JournalReport:
    """Journal limits that were applied.

    Attributes:
        max_size: Size passed to ``journalctl --vacuum-size``.
        max_age: Age passed to ``journalctl --vacuum-time``.
    """

    max_size: str
    max_age: str


@dataclass(frozen=True, slots=True)
class DiskUsage:
    """One row of ``df -h`` output.

    Attributes:
        filesystem: Device or filesystem name.
        size: Total size.
        used: Used space.
        available: Free space available to unprivileged users.
        use_percent: Usage percentage including the ``%`` sign.
        mount_point: Where the filesystem is mounted.
    """

    filesystem: str
    size: str
    used: str
    available: str
    use_percent: str
    mount_point: str


@dataclass(frozen=True, slots=True)
class MemoryUsage:
    """The ``Mem:`` row of ``free -h`` output.

    Attributes:
        total: Installed memory.
        used: Memory in use.
        free: Completely unused memory.
        available: Memory available for new applications, if reported.
    """

    total: str
    used: str
    free: str
    available: str | None = None


@dataclass(frozen=True, slots=True)
class SystemStatus:
    """Live disk and memory figures printed after cleanup."""

    disk: DiskUsage
    memory: MemoryUsage


@dataclass(slots=True)
class RunReport:
    """Reports of the steps that ran during one cleanup session.

    A step the user declined leaves its attribute as None.
    """

    cache: CacheReport | None = None
    orphans: OrphanReport | None = None
    configs: ConfigCleanReport | None = None
    journals: JournalReport | None = None
    status: SystemStatus | None = None
    declined: list[str] = field(default_factory=list)

    @property
    def anything_ran(self) -> bool:
        """True if at least one cleanup step was confirmed."""
        return any(
            report is not None
            for report in (self.cache, self.orphans, self.configs, self.journals)
        )
