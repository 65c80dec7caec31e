"""Memory metrics — usage and limit in bytes, and their ratio.

Cgroup sources report the cgroup's own limit and usage, falling back to
``/proc/meminfo`` when the cgroup is unlimited or its memory controller
is not mounted.
"""

from __future__ import annotations

from sysres.sources.base import MetricsSource


class MemoryResolver:
    def __init__(self, source: MetricsSource) -> None:
        self.source = source

    def limit_bytes(self) -> int:
        return self.source.memory_limit_bytes()

    def used_bytes(self) -> int:
        return self.source.memory_used_bytes()

    def usage(self) -> float:
        """Used bytes as a fraction of the limit, 0.0 when no limit is known."""
        limit = self.limit_bytes()
        if limit <= 0:
            return 0.0
        return self.used_bytes() / limit
