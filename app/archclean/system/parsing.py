"""Parsers for tabular system tool output.

``df`` and ``free`` print fixed-column tables; these helpers pick the
columns the status summary needs and reject anything malformed.
"""

from archclean.models.report import DiskUsage, MemoryUsage

# Filesystem Size Used Avail Use% Mounted-on
_DF_FIELDS = 6
# Mem: total used free [shared buff/cache available]
_FREE_MIN_FIELDS = 4
_FREE_AVAILABLE_INDEX = 6


def parse_du_size(output: str) -> str:
    """Extract the size column from ``du -sh`` output.

    Args:
        output: Raw stdout, e.g. ``"1.2G\\t/var/cache/pacman/pkg\\n"``.

    Returns:
        The human-readable size (first tab-separated field).

    Raises:
        ValueError: If the output is empty.
    """
    line = output.strip().splitlines()[-1] if output.strip() else ""
    size = line.split("\t", 1)[0].strip()
    if not size:
        msg = "du produced no size output"
        raise ValueError(msg)
    return size


def parse_df(output: str) -> DiskUsage:
    """Parse the last data row of ``df -hP`` output.

    The mount point may contain spaces, so everything after the fifth
    column is joined back together.

    Args:
        output: Raw stdout including the header row.

    Returns:
        DiskUsage for the last listed filesystem.

    Raises:
        ValueError: If no data row with enough columns is present.
    """
    lines = [line for line in output.strip().splitlines() if line.strip()]
    if len(lines) < 2:
        msg = "df output has no data row"
        raise ValueError(msg)

    fields = lines[-1].split(None, _DF_FIELDS - 1)
    if len(fields) < _DF_FIELDS:
        msg = f"Unexpected df row: {lines[-1]!r}"
        raise ValueError(msg)

    filesystem, size, used, available, use_percent, mount_point = fields
    return DiskUsage(
        filesystem=filesystem,
        size=size,
        used=used,
        available=available,
        use_percent=use_percent,
        mount_point=mount_point.strip(),
    )


def parse_free(output: str) -> MemoryUsage:
    """Parse the ``Mem:`` row of ``free -h`` output.

    Args:
        output: Raw stdout including the header row.

    Returns:
        MemoryUsage with total/used/free and, when printed, available memory.

    Raises:
        ValueError: If the ``Mem:`` row is missing or truncated.
    """
    for line in output.splitlines():
        fields = line.split()
        if not fields or fields[0] != "Mem:":
            continue
        if len(fields) < _FREE_MIN_FIELDS:
            msg = f"Unexpected free row: {line!r}"
            raise ValueError(msg)
        available = fields[_FREE_AVAILABLE_INDEX] if len(fields) > _FREE_AVAILABLE_INDEX else None
        return MemoryUsage(
            total=fields[1],
            used=fields[2],
            free=fields[3],
            available=available,
        )

    msg = "free output has no 'Mem:' row"
    raise ValueError(msg)


def split_null_terminated(output: str) -> list[str]:
    """Split ``find -print0`` output into paths, dropping the trailing empty entry."""
    return [entry for entry in output.split("\0") if entry]
