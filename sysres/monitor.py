"""ResourceMonitor — container-aware CPU and memory metrics.

The monitor detects the platform on first use, binds the matching metric
source once, and delegates every accessor to it. It owns all mutable
state (platform cache, container flag, CPU delta baseline), so
independent monitors never interfere with each other.

Usage::

    monitor = ResourceMonitor()
    monitor.cpu_load()            # 0.0: first call seeds the baseline
    time.sleep(1)
    monitor.cpu_load()            # fraction of the CPU limit used in the last second
    monitor.mem_usage()           # fraction of the memory limit in use
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from sysres.config import settings
from sysres.cpu import CpuResolver, cpu_cores_override
from sysres.detector import PlatformDetector
from sysres.memory import MemoryResolver
from sysres.models.platform import CgroupVersion, CpuDeltaState, Platform, ResourceSnapshot
from sysres.probe import FileProbe
from sysres.sources import MetricsSource, logical_cpu_count, source_for
from sysres.utils import get_logger
from sysres.utils.clock import now_micros

logger = get_logger("monitor")


class ResourceMonitor:
    """Collects resource metrics relative to the limits confining this process.

    Args:
        probe:     FileProbe for all pseudo-file reads. Defaults to one rooted
                   at ``settings.fs_root``.
        system:    ``sys.platform``-style OS name; defaults to the interpreter's.
        clock:     Monotonic microsecond clock for CPU deltas.
        cpu_count: Logical CPU count function.
        override:  Returns the configured CPU core override, or None.

    Construction performs no I/O.
    """

    def __init__(
        self,
        probe: FileProbe | None = None,
        system: str | None = None,
        clock: Callable[[], int] = now_micros,
        cpu_count: Callable[[], int] = logical_cpu_count,
        override: Callable[[], float | None] = cpu_cores_override,
    ) -> None:
        self.probe = probe if probe is not None else FileProbe(settings.fs_root)
        self.detector = PlatformDetector(self.probe, system)
        self.clock = clock
        self.cpu_count = cpu_count
        self.override = override
        self._lock = threading.RLock()
        self._delta = CpuDeltaState()
        self._source: MetricsSource | None = None
        self._cpu: CpuResolver | None = None
        self._memory: MemoryResolver | None = None

    # ── Binding ───────────────────────────────────────────────────────────

    def _bind(self) -> None:
        with self._lock:
            if self._source is not None:
                return
            platform = self.detector.detect_platform()
            self._source = source_for(platform, self.probe, self.detector, self.cpu_count)
            self._cpu = CpuResolver(
                self._source, self.clock, self.override, state=self._delta, lock=self._lock
            )
            self._memory = MemoryResolver(self._source)
            logger.debug("source_bound", platform=platform.value, source=repr(self._source))

    @property
    def source(self) -> MetricsSource:
        with self._lock:
            self._bind()
            return self._source

    @property
    def cpu(self) -> CpuResolver:
        with self._lock:
            self._bind()
            return self._cpu

    @property
    def memory(self) -> MemoryResolver:
        with self._lock:
            self._bind()
            return self._memory

    # ── Detection ─────────────────────────────────────────────────────────

    def detect_platform(self) -> Platform:
        return self.detector.detect_platform()

    def cgroup_version(self) -> CgroupVersion:
        return self.detector.detect_version()

    def is_container_env(self) -> bool:
        return self.detector.is_container_env()

    def resolve_cgroup_dir(self) -> str:
        return self.detector.resolve_cgroup_dir()

    # ── CPU ───────────────────────────────────────────────────────────────

    def cpu_load_avg(self) -> float:
        """Normalized CPU load; 1.0 means every available core is busy.

        Cgroup hosts use delta-based accounting (first call returns 0.0);
        plain Linux hosts and macOS use the 1-minute load average.
        """
        return self.cpu.load_avg()

    def cpu_load(self) -> float:
        """Usage as a fraction of the CPU limit. First call returns 0.0."""
        return self.cpu.load()

    def cpu_usage_millicores(self) -> int:
        return self.cpu.usage_millicores()

    def cpu_usage_micros(self) -> int:
        """Cumulative CPU time of the whole cgroup; 0 without cgroup accounting."""
        return self.cpu.usage_micros()

    def cpu_limit_cores(self) -> float:
        return self.cpu.limit_cores()

    def cpu_limit_millicores(self) -> int:
        """CPU limit in millicores, -1 when unlimited or unreadable."""
        return self.cpu.limit_millicores()

    # ── Memory ────────────────────────────────────────────────────────────

    def mem_usage(self) -> float:
        return self.memory.usage()

    def memory_limit_bytes(self) -> int:
        return self.memory.limit_bytes()

    def memory_used_bytes(self) -> int:
        return self.memory.used_bytes()

    # ── State ─────────────────────────────────────────────────────────────

    def reset_state(self) -> None:
        """Forget the detected platform, container flag and CPU baseline."""
        with self._lock:
            self.detector.clear_cache()
            self._delta.clear()
            self._source = None
            self._cpu = None
            self._memory = None

    def snapshot(self) -> ResourceSnapshot:
        """Take a snapshot of every metric.

        Advances the CPU baseline once; ``cpu_load`` is derived from the same
        millicore reading.
        """
        cpu = self.cpu
        millicores = cpu.usage_millicores()
        used = self.memory_used_bytes()
        limit = self.memory_limit_bytes()
        return ResourceSnapshot(
            platform=self.detect_platform(),
            cgroup_version=self.cgroup_version(),
            is_container=self.is_container_env(),
            cpu_load_avg=cpu.load(millicores) if cpu.source.tracks_cpu_time else cpu.source.load_avg(),
            cpu_load=cpu.load(millicores),
            cpu_usage_millicores=millicores,
            cpu_usage_micros=cpu.usage_micros(),
            cpu_limit_cores=cpu.limit_cores(),
            cpu_limit_millicores=cpu.limit_millicores(),
            mem_usage=used / limit if limit > 0 else 0.0,
            memory_limit_bytes=limit,
            memory_used_bytes=used,
        )
