"""Cgroup v2 (unified hierarchy) source.

All controller files are read from the process's own cgroup directory
(see ``PlatformDetector.resolve_cgroup_dir``), not the mount root: on a
systemd host the root-level memory files do not describe this process.
"""

from __future__ import annotations

from collections.abc import Callable

from sysres import paths
from sysres.models.platform import Platform
from sysres.probe import FileProbe, parse_int
from sysres.sources import procfs
from sysres.sources.base import NO_CPU_LIMIT, MetricsSource, logical_cpu_count


def parse_cpu_stat_usage(content: str) -> int | None:
    """``usage_usec`` from ``cpu.stat`` content."""
    for line in content.splitlines():
        tokens = line.split()
        if len(tokens) >= 2 and tokens[0] == "usage_usec":
            return parse_int(tokens[1])
    return None


def parse_cpu_max(content: str) -> int:
    """Millicores from ``cpu.max`` ("<quota|max> <period>"), -1 if unlimited or malformed."""
    tokens = content.split()
    if len(tokens) < 2 or tokens[0] == "max":
        return NO_CPU_LIMIT
    quota, period = parse_int(tokens[0]), parse_int(tokens[1])
    if quota is None or period is None or period <= 0:
        return NO_CPU_LIMIT
    return quota * 1000 // period


class CgroupV2Source(MetricsSource):
    platform = Platform.LINUX_CGROUP_V2
    tracks_cpu_time = True

    def __init__(
        self,
        probe: FileProbe,
        cgroup_dir: str = paths.CGROUP_V2_MOUNT,
        cpu_count: Callable[[], int] = logical_cpu_count,
    ) -> None:
        super().__init__(cpu_count)
        self.probe = probe
        self.cgroup_dir = cgroup_dir

    def _path(self, name: str) -> str:
        return f"{self.cgroup_dir}/{name}"

    def usage_micros(self) -> int:
        content = self.probe.read(self._path(paths.CPU_STAT))
        if content is None:
            return 0
        return parse_cpu_stat_usage(content) or 0

    def limit_millicores(self) -> int:
        content = self.probe.read(self._path(paths.CPU_MAX))
        if content is None:
            return NO_CPU_LIMIT
        return parse_cpu_max(content)

    def memory_limit_bytes(self) -> int:
        content = self.probe.read(self._path(paths.MEMORY_MAX))
        limit = None if content == "max" else parse_int(content)
        if limit is None or limit <= 0:
            return procfs.mem_total_bytes(self.probe)
        return limit

    def memory_used_bytes(self) -> int:
        used = parse_int(self.probe.read(self._path(paths.MEMORY_CURRENT)))
        if used is None or used <= 0:
            return procfs.mem_used_bytes(self.probe)
        return used
