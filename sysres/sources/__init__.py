"""Per-platform metric sources.

Each source answers the same five questions for one kind of environment;
``source_for()`` picks the right one for a detected ``Platform``.
"""

from __future__ import annotations

from collections.abc import Callable

from sysres.detector import PlatformDetector
from sysres.models.platform import Platform
from sysres.probe import FileProbe
from sysres.sources.base import MetricsSource, logical_cpu_count
from sysres.sources.cgroup_v1 import CgroupV1Source
from sysres.sources.cgroup_v2 import CgroupV2Source
from sysres.sources.host import HostSource
from sysres.sources.macos import MacOSSource
from sysres.sources.unsupported import UnsupportedSource

__all__ = [
    "MetricsSource",
    "CgroupV1Source",
    "CgroupV2Source",
    "HostSource",
    "MacOSSource",
    "UnsupportedSource",
    "logical_cpu_count",
    "source_for",
]


def source_for(
    platform: Platform,
    probe: FileProbe,
    detector: PlatformDetector,
    cpu_count: Callable[[], int] = logical_cpu_count,
) -> MetricsSource:
    """Build the source bound to ``platform``."""
    if platform is Platform.LINUX_CGROUP_V2:
        return CgroupV2Source(probe, detector.resolve_cgroup_dir(), cpu_count)
    if platform is Platform.LINUX_CGROUP_V1:
        return CgroupV1Source(probe, cpu_count)
    if platform is Platform.LINUX_HOST:
        return HostSource(probe, cpu_count)
    if platform is Platform.MACOS_HOST:
        return MacOSSource(cpu_count)
    return UnsupportedSource(cpu_count)
