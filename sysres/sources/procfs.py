"""Readers for host-wide /proc files.

Used directly on plain Linux hosts and as the fallback behind the cgroup
memory readers.
"""

from __future__ import annotations

from sysres import paths
from sysres.probe import FileProbe, parse_float, parse_int


def parse_meminfo(content: str) -> dict[str, int]:
    """Map ``/proc/meminfo`` keys to their kB values.

    Lines look like ``MemTotal:       16384000 kB``. Malformed lines are skipped.
    """
    fields: dict[str, int] = {}
    for line in content.splitlines():
        key, sep, rest = line.partition(":")
        if not sep:
            continue
        tokens = rest.split()
        if not tokens:
            continue
        value = parse_int(tokens[0])
        if value is not None:
            fields[key.strip()] = value
    return fields


def read_meminfo(probe: FileProbe) -> dict[str, int] | None:
    content = probe.read(paths.PROC_MEMINFO)
    if content is None:
        return None
    return parse_meminfo(content)


def mem_total_bytes(probe: FileProbe) -> int:
    """``MemTotal`` in bytes, 0 when unavailable."""
    meminfo = read_meminfo(probe) or {}
    return meminfo.get("MemTotal", 0) * 1024


def mem_used_bytes(probe: FileProbe) -> int:
    """``MemTotal - MemAvailable`` in bytes, 0 when either is missing.

    Reclaimable page cache counts as available, matching how container
    orchestrators report usage. This formula is pinned; do not switch to
    the older ``MemFree + Buffers + Cached`` subtraction.
    """
    meminfo = read_meminfo(probe) or {}
    total = meminfo.get("MemTotal")
    available = meminfo.get("MemAvailable")
    if total is None or available is None:
        return 0
    return (total - available) * 1024


def load_avg_1m(probe: FileProbe) -> float | None:
    """First field of ``/proc/loadavg`` ("0.00 0.01 0.05 1/234 12345")."""
    content = probe.read(paths.PROC_LOADAVG)
    if content is None:
        return None
    tokens = content.split()
    if not tokens:
        return None
    return parse_float(tokens[0])
