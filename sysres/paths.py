"""Pseudo-file locations read by sysres.

All paths are absolute; ``FileProbe`` prepends its root when one is set.
Cgroup v2 controller files live in the process's resolved cgroup
directory, so only their file names are listed here.
"""

# ── Cgroup v2 (unified) ───────────────────────────────────────────────────────
CGROUP_V2_MOUNT = "/sys/fs/cgroup"
CGROUP_V2_ROOT_CPU_STAT = "/sys/fs/cgroup/cpu.stat"  # detection only

CPU_STAT = "cpu.stat"
CPU_MAX = "cpu.max"
MEMORY_CURRENT = "memory.current"
MEMORY_MAX = "memory.max"

# ── Cgroup v1 (per-controller) ────────────────────────────────────────────────
CGROUP_V1_CPUACCT_USAGE = "/sys/fs/cgroup/cpuacct/cpuacct.usage"
CGROUP_V1_CPUACCT_USAGE_ALT = "/sys/fs/cgroup/cpu,cpuacct/cpuacct.usage"
CGROUP_V1_CPU_QUOTA = "/sys/fs/cgroup/cpu/cpu.cfs_quota_us"
CGROUP_V1_CPU_QUOTA_ALT = "/sys/fs/cgroup/cpu,cpuacct/cpu.cfs_quota_us"
CGROUP_V1_CPU_PERIOD = "/sys/fs/cgroup/cpu/cpu.cfs_period_us"
CGROUP_V1_CPU_PERIOD_ALT = "/sys/fs/cgroup/cpu,cpuacct/cpu.cfs_period_us"
CGROUP_V1_MEMORY_USAGE = "/sys/fs/cgroup/memory/memory.usage_in_bytes"
CGROUP_V1_MEMORY_LIMIT = "/sys/fs/cgroup/memory/memory.limit_in_bytes"

# v1 reports "no limit" as a page-aligned LONG_MAX (9223372036854771712)
CGROUP_V1_NO_LIMIT_THRESHOLD = 9_000_000_000_000_000_000

# ── /proc ─────────────────────────────────────────────────────────────────────
PROC_MEMINFO = "/proc/meminfo"
PROC_LOADAVG = "/proc/loadavg"
PROC_SELF_CGROUP = "/proc/self/cgroup"
