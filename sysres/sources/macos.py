"""macOS (and other non-Linux POSIX) source backed by psutil.

There are no containers to account for here: limits are the host's own
CPU count and physical memory.
"""

from __future__ import annotations

from collections.abc import Callable

import psutil

from sysres.models.platform import Platform
from sysres.sources.base import MetricsSource, logical_cpu_count
from sysres.utils import get_logger

logger = get_logger("sources.macos")


def current_cpu_limit_cores() -> float:
    return float(psutil.cpu_count(logical=True) or 1)


def current_memory_stats() -> tuple[int, int]:
    """(used_bytes, total_bytes) of host memory."""
    mem = psutil.virtual_memory()
    return int(mem.used), int(mem.total)


class MacOSSource(MetricsSource):
    platform = Platform.MACOS_HOST

    def __init__(self, cpu_count: Callable[[], int] = logical_cpu_count) -> None:
        super().__init__(cpu_count)

    def limit_millicores(self) -> int:
        return self.cpu_count() * 1000

    def native_limit_cores(self) -> float | None:
        return current_cpu_limit_cores()

    def memory_limit_bytes(self) -> int:
        return current_memory_stats()[1]

    def memory_used_bytes(self) -> int:
        return current_memory_stats()[0]

    def load_avg(self) -> float:
        try:
            load_1m = psutil.getloadavg()[0]
        except OSError as exc:
            logger.debug("loadavg_unavailable", error=str(exc))
            return 0.0
        return load_1m / current_cpu_limit_cores()
