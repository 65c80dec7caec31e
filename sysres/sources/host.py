"""Plain Linux host source — /proc only, no cgroup accounting."""

from __future__ import annotations

from collections.abc import Callable

from sysres.models.platform import Platform
from sysres.probe import FileProbe
from sysres.sources import procfs
from sysres.sources.base import MetricsSource, logical_cpu_count


class HostSource(MetricsSource):
    platform = Platform.LINUX_HOST

    def __init__(self, probe: FileProbe, cpu_count: Callable[[], int] = logical_cpu_count) -> None:
        super().__init__(cpu_count)
        self.probe = probe

    def memory_limit_bytes(self) -> int:
        return procfs.mem_total_bytes(self.probe)

    def memory_used_bytes(self) -> int:
        return procfs.mem_used_bytes(self.probe)

    def load_avg(self) -> float:
        load = procfs.load_avg_1m(self.probe)
        if load is None:
            return 0.0
        return load / self.cpu_count()
