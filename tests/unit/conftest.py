"""Unit-test conftest — synthetic pseudo-filesystem, fake clock, fake source.

All fixtures here are available to every test under tests/unit/ without import.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from sysres.models.platform import Platform
from sysres.monitor import ResourceMonitor
from sysres.probe import FileProbe
from sysres.sources.base import NO_CPU_LIMIT, MetricsSource

MEMINFO = (
    "MemTotal:       16384000 kB\n"
    "MemFree:         2048000 kB\n"
    "MemAvailable:    8192000 kB\n"
    "Buffers:          512000 kB\n"
    "Cached:          4096000 kB\n"
)


# ─────────────────────────────────────────────────────────────────────────────
# FakeFS — writes absolute pseudo-file paths under tmp_path
# ─────────────────────────────────────────────────────────────────────────────

class FakeFS:
    """A throwaway filesystem tree that a FileProbe can be rooted at.

    ``write("/sys/fs/cgroup/cpu.max", "max 100000")`` creates
    ``<tmp>/sys/fs/cgroup/cpu.max``.
    """

    def __init__(self, root: Path) -> None:
        self.root = root

    def write(self, path: str, content: str) -> Path:
        target = self.root / path.lstrip("/")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content)
        return target

    def remove(self, path: str) -> None:
        (self.root / path.lstrip("/")).unlink()

    def probe(self) -> FileProbe:
        return FileProbe(str(self.root))

    # Common layouts

    def cgroup_v2(self, cpu_max: str = "max 100000", memory_max: str = "max",
                  memory_current: str = "104857600", usage_usec: int = 1000000) -> None:
        self.write("/sys/fs/cgroup/cpu.stat", f"usage_usec {usage_usec}\nuser_usec 600000\nsystem_usec 400000\n")
        self.write("/sys/fs/cgroup/cpu.max", cpu_max + "\n")
        self.write("/sys/fs/cgroup/memory.max", memory_max + "\n")
        self.write("/sys/fs/cgroup/memory.current", memory_current + "\n")
        self.write("/proc/self/cgroup", "0::/\n")
        self.write("/proc/meminfo", MEMINFO)

    def cgroup_v1(self, usage_ns: int = 2_000_000_000, quota: int = 100000, period: int = 100000,
                  memory_limit: int = 268435456, memory_usage: int = 67108864) -> None:
        self.write("/sys/fs/cgroup/cpuacct/cpuacct.usage", f"{usage_ns}\n")
        self.write("/sys/fs/cgroup/cpu/cpu.cfs_quota_us", f"{quota}\n")
        self.write("/sys/fs/cgroup/cpu/cpu.cfs_period_us", f"{period}\n")
        self.write("/sys/fs/cgroup/memory/memory.limit_in_bytes", f"{memory_limit}\n")
        self.write("/sys/fs/cgroup/memory/memory.usage_in_bytes", f"{memory_usage}\n")
        self.write("/proc/meminfo", MEMINFO)

    def host(self, loadavg: str = "2.00 1.50 1.00 3/456 7890") -> None:
        self.write("/proc/meminfo", MEMINFO)
        self.write("/proc/loadavg", loadavg + "\n")


# ─────────────────────────────────────────────────────────────────────────────
# FakeClock — microsecond clock advanced by hand
# ─────────────────────────────────────────────────────────────────────────────

class FakeClock:
    def __init__(self, start: int = 1_000_000) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, micros: int) -> None:
        self.now += micros


# ─────────────────────────────────────────────────────────────────────────────
# FakeSource — scripted cumulative counter and limit
# ─────────────────────────────────────────────────────────────────────────────

class FakeSource(MetricsSource):
    """MetricsSource whose counter advances by ``step`` micros per read.

    Args:
        start:    First cumulative reading.
        step:     Increment applied after every ``usage_micros()`` call.
        limit:    Value returned by ``limit_millicores()``.
        cpus:     Logical CPU count.
    """

    platform = Platform.LINUX_CGROUP_V2
    tracks_cpu_time = True

    def __init__(self, start: int = 0, step: int = 0, limit: int = NO_CPU_LIMIT, cpus: int = 4) -> None:
        super().__init__(lambda: cpus)
        self.micros = start
        self.step = step
        self.limit = limit
        # Call counters for assertion
        self.usage_calls = 0

    def usage_micros(self) -> int:
        self.usage_calls += 1
        value = self.micros
        self.micros += self.step
        return value

    def limit_millicores(self) -> int:
        return self.limit


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def fake_fs(tmp_path):
    """An empty synthetic filesystem rooted at tmp_path."""
    return FakeFS(tmp_path)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def no_override():
    """Override function that never supplies a core count."""
    return lambda: None


@pytest.fixture
def make_monitor(fake_fs, clock, no_override):
    """Factory for a Linux ResourceMonitor over the fake filesystem with 4 CPUs."""

    def _make(system: str = "linux", cpus: int = 4, override=no_override) -> ResourceMonitor:
        return ResourceMonitor(
            probe=fake_fs.probe(),
            system=system,
            clock=clock,
            cpu_count=lambda: cpus,
            override=override,
        )

    return _make


@pytest.fixture
def make_source():
    """Factory for FakeSource: ``make_source(start=0, step=500_000, limit=1000)``."""
    return FakeSource
