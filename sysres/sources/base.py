"""Common interface shared by every metric source."""

from __future__ import annotations

from collections.abc import Callable

import psutil

from sysres.models.platform import Platform

NO_CPU_LIMIT = -1


def logical_cpu_count() -> int:
    """Logical CPUs this process may run on (affinity-aware where supported)."""
    try:
        allowed = len(psutil.Process().cpu_affinity())
    except (AttributeError, psutil.Error, OSError):
        # cpu_affinity() does not exist on macOS
        allowed = 0
    return allowed or psutil.cpu_count(logical=True) or 1


class MetricsSource:
    """Readers for one platform.

    The defaults here are the "nothing readable" answers; subclasses
    override what their platform can actually measure.

    ``tracks_cpu_time`` is True when ``usage_micros()`` reads a cumulative
    CPU-time counter, i.e. when delta-based load is meaningful.
    """

    platform: Platform = Platform.UNSUPPORTED
    tracks_cpu_time: bool = False

    def __init__(self, cpu_count: Callable[[], int] = logical_cpu_count) -> None:
        self.cpu_count = cpu_count

    def usage_micros(self) -> int:
        """Cumulative CPU time consumed, in microseconds."""
        return 0

    def limit_millicores(self) -> int:
        """CPU limit in millicores, ``NO_CPU_LIMIT`` when unlimited or unknown."""
        return NO_CPU_LIMIT

    def native_limit_cores(self) -> float | None:
        """CPU limit straight from the OS, bypassing the millicore chain."""
        return None

    def memory_limit_bytes(self) -> int:
        return 0

    def memory_used_bytes(self) -> int:
        return 0

    def load_avg(self) -> float:
        """Host load average normalized by CPU count (non-cgroup platforms)."""
        return 0.0

    def __repr__(self) -> str:
        return f"{type(self).__name__}(platform={self.platform.value})"
