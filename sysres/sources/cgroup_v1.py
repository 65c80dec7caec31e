"""Cgroup v1 (per-controller hierarchies) source.

Distributions mount the cpu and cpuacct controllers either separately
(``cpu/``, ``cpuacct/``) or combined (``cpu,cpuacct/``); both layouts are
tried, separate first.
"""

from __future__ import annotations

from collections.abc import Callable

from sysres import paths
from sysres.models.platform import Platform
from sysres.probe import FileProbe, first_of, parse_int
from sysres.sources import procfs
from sysres.sources.base import NO_CPU_LIMIT, MetricsSource, logical_cpu_count

_QUOTA_PERIOD_PAIRS = (
    (paths.CGROUP_V1_CPU_QUOTA, paths.CGROUP_V1_CPU_PERIOD),
    (paths.CGROUP_V1_CPU_QUOTA_ALT, paths.CGROUP_V1_CPU_PERIOD_ALT),
)


class CgroupV1Source(MetricsSource):
    platform = Platform.LINUX_CGROUP_V1
    tracks_cpu_time = True

    def __init__(self, probe: FileProbe, cpu_count: Callable[[], int] = logical_cpu_count) -> None:
        super().__init__(cpu_count)
        self.probe = probe

    def _usage_from(self, path: str) -> int | None:
        nanos = parse_int(self.probe.read(path))
        return None if nanos is None else nanos // 1000

    def usage_micros(self) -> int:
        return first_of(
            lambda: self._usage_from(paths.CGROUP_V1_CPUACCT_USAGE),
            lambda: self._usage_from(paths.CGROUP_V1_CPUACCT_USAGE_ALT),
            default=0,
        )

    def _limit_from(self, quota_path: str, period_path: str) -> int | None:
        quota = parse_int(self.probe.read(quota_path))
        period = parse_int(self.probe.read(period_path))
        if quota is None or period is None:
            return None
        if quota == -1:
            return NO_CPU_LIMIT
        if period <= 0:
            return None
        return quota * 1000 // period

    def limit_millicores(self) -> int:
        return first_of(
            *(lambda q=q, p=p: self._limit_from(q, p) for q, p in _QUOTA_PERIOD_PAIRS),
            default=NO_CPU_LIMIT,
        )

    def memory_limit_bytes(self) -> int:
        limit = parse_int(self.probe.read(paths.CGROUP_V1_MEMORY_LIMIT))
        if limit is None or limit <= 0 or limit >= paths.CGROUP_V1_NO_LIMIT_THRESHOLD:
            return procfs.mem_total_bytes(self.probe)
        return limit

    def memory_used_bytes(self) -> int:
        used = parse_int(self.probe.read(paths.CGROUP_V1_MEMORY_USAGE))
        if used is None or used <= 0:
            return procfs.mem_used_bytes(self.probe)
        return used
