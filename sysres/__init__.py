"""sysres — container-aware CPU and memory metrics.

Reads cgroup v1/v2 accounting files and /proc so a process can report its
resource use relative to the limits it actually runs under (Kubernetes,
Docker, gVisor), with host fallbacks everywhere else.

The module-level functions share one process-wide ``ResourceMonitor``.
Create your own ``ResourceMonitor`` for isolated state.

Usage::

    import sysres

    sysres.is_container_env()
    sysres.cpu_limit_cores()          # 0.5 for a 500m limit
    sysres.cpu_load_avg()             # 1.0 == every available core busy
    sysres.mem_usage()                # fraction of the memory limit in use
"""

from __future__ import annotations

from sysres.models.platform import CgroupVersion, Platform, ResourceSnapshot
from sysres.monitor import ResourceMonitor

__all__ = [
    "CgroupVersion",
    "Platform",
    "ResourceMonitor",
    "ResourceSnapshot",
    "default_monitor",
    "detect_platform",
    "cgroup_version",
    "is_container_env",
    "cpu_load_avg",
    "cpu_load",
    "cpu_usage_millicores",
    "cpu_usage_micros",
    "cpu_limit_cores",
    "cpu_limit_millicores",
    "mem_usage",
    "memory_limit_bytes",
    "memory_used_bytes",
    "reset_state",
    "snapshot",
]

# Singleton — shared by the module-level accessors below
default_monitor = ResourceMonitor()


def detect_platform() -> Platform:
    return default_monitor.detect_platform()


def cgroup_version() -> CgroupVersion:
    return default_monitor.cgroup_version()


def is_container_env() -> bool:
    return default_monitor.is_container_env()


def cpu_load_avg() -> float:
    return default_monitor.cpu_load_avg()


def cpu_load() -> float:
    return default_monitor.cpu_load()


def cpu_usage_millicores() -> int:
    return default_monitor.cpu_usage_millicores()


def cpu_usage_micros() -> int:
    return default_monitor.cpu_usage_micros()


def cpu_limit_cores() -> float:
    return default_monitor.cpu_limit_cores()


def cpu_limit_millicores() -> int:
    return default_monitor.cpu_limit_millicores()


def mem_usage() -> float:
    return default_monitor.mem_usage()


def memory_limit_bytes() -> int:
    return default_monitor.memory_limit_bytes()


def memory_used_bytes() -> int:
    return default_monitor.memory_used_bytes()


def reset_state() -> None:
    """Clear the shared monitor's cached platform and CPU baseline."""
    default_monitor.reset_state()


def snapshot() -> ResourceSnapshot:
    return default_monitor.snapshot()
