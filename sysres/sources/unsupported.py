"""Source for platforms without resource accounting support (Windows).

Never touches the filesystem. CPU limits report the host CPU count so
callers sizing worker pools still get a usable number.
"""

from __future__ import annotations

from sysres.models.platform import Platform
from sysres.sources.base import MetricsSource


class UnsupportedSource(MetricsSource):
    platform = Platform.UNSUPPORTED

    def limit_millicores(self) -> int:
        return self.cpu_count() * 1000
