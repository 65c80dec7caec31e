"""Platform and measurement types.

``Platform`` is the flat runtime classification used for dispatch: it
combines the OS check and the cgroup probe into a single value.
``CgroupVersion`` is its projection for diagnostics.
"""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass
from typing import Any


# ── Platform enums ────────────────────────────────────────────────────────────


class Platform(str, enum.Enum):
    """Resolved runtime environment.

    MACOS_HOST       — macOS or another non-Linux POSIX host; psutil readers.
    LINUX_CGROUP_V2  — Linux with the unified hierarchy.
    LINUX_CGROUP_V1  — Linux with per-controller hierarchies.
    LINUX_HOST       — Linux without cgroup accounting files; /proc only.
    UNSUPPORTED      — Windows and anything else; every metric is a default.
    """

    MACOS_HOST = "macos_host"
    LINUX_CGROUP_V2 = "linux_cgroup_v2"
    LINUX_CGROUP_V1 = "linux_cgroup_v1"
    LINUX_HOST = "linux_host"
    UNSUPPORTED = "unsupported"

    @property
    def cgroup_version(self) -> "CgroupVersion":
        if self is Platform.LINUX_CGROUP_V2:
            return CgroupVersion.V2
        if self is Platform.LINUX_CGROUP_V1:
            return CgroupVersion.V1
        return CgroupVersion.NONE


class CgroupVersion(str, enum.Enum):
    V1 = "v1"
    V2 = "v2"
    NONE = "none"


# ── CPU delta state ───────────────────────────────────────────────────────────


@dataclass
class CpuDeltaState:
    """Previous cumulative CPU reading used for rate computation.

    Both fields are set together or cleared together; ``is_set`` is the
    only check callers should make.
    """

    previous_micros: int | None = None
    previous_timestamp: int | None = None

    @property
    def is_set(self) -> bool:
        return self.previous_micros is not None and self.previous_timestamp is not None

    def update(self, micros: int, timestamp: int) -> None:
        self.previous_micros = micros
        self.previous_timestamp = timestamp

    def clear(self) -> None:
        self.previous_micros = None
        self.previous_timestamp = None


# ── Snapshot ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ResourceSnapshot:
    """One reading of every accessor, taken together.

    ``cpu_load`` and ``cpu_usage_millicores`` advance the monitor's delta
    state exactly once per snapshot.
    """

    platform: Platform
    cgroup_version: CgroupVersion
    is_container: bool
    cpu_load_avg: float
    cpu_load: float
    cpu_usage_millicores: int
    cpu_usage_micros: int
    cpu_limit_cores: float
    cpu_limit_millicores: int
    mem_usage: float
    memory_limit_bytes: int
    memory_used_bytes: int

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["platform"] = self.platform.value
        data["cgroup_version"] = self.cgroup_version.value
        return data
