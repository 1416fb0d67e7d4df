"""Data models for archclean.

This module exports the report types produced by cleanup steps.
"""

from archclean.models.report import (
    CacheReport,
    ConfigCleanReport,
    DiskUsage,
    JournalReport,
    MemoryUsage,
    OrphanReport,
    RunReport,
    SystemStatus,
)

__all__ = [
    "CacheReport",
    "ConfigCleanReport",
    "DiskUsage",
    "JournalReport",
    "MemoryUsage",
    "OrphanReport",
    "RunReport",
    "SystemStatus",
]
