"""CPU metrics — delta-based usage rate, normalized load and limits.

Cgroup accounting files expose *cumulative* CPU time. A rate needs two
readings, so the resolver keeps the previous ``(micros, timestamp)`` pair
and turns each new reading into millicores for the interval since:

    millicores = round(delta_cpu_micros / interval_micros * 1000)

1000 millicores is one logical core fully busy for the whole interval.
The first reading after construction or ``reset()`` only seeds the
baseline and returns 0.

This counts every process in the cgroup, not just the caller, and works
under gVisor where ``getloadavg`` is not available.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Callable

from sysres.config import SysresSettings
from sysres.models.platform import CpuDeltaState
from sysres.sources.base import MetricsSource
from sysres.utils import get_logger

logger = get_logger("cpu")


def cpu_cores_override() -> float | None:
    """The ``SYSRES_CPU_CORES`` override (environment or .env), re-read on every call."""
    cores = SysresSettings().cpu_cores
    if cores is None or not math.isfinite(cores) or cores <= 0:
        return None
    return cores


class CpuResolver:
    """Turns a source's cumulative CPU counter into rates and fractions.

    Args:
        source:        The platform source bound at detection time.
        clock:         Microsecond clock; only differences are used.
        override:      Returns the configured core count, or None.

    ``usage_millicores`` mutates the shared delta state under a lock, so
    two threads never both seed the baseline or see a torn pair.
    """

    def __init__(
        self,
        source: MetricsSource,
        clock: Callable[[], int],
        override: Callable[[], float | None] = cpu_cores_override,
        state: CpuDeltaState | None = None,
        lock: threading.RLock | None = None,
    ) -> None:
        self.source = source
        self.clock = clock
        self.override = override
        self.state = state if state is not None else CpuDeltaState()
        self._lock = lock if lock is not None else threading.RLock()

    # ── Usage ─────────────────────────────────────────────────────────────

    def usage_micros(self) -> int:
        return self.source.usage_micros()

    def usage_millicores(self) -> int:
        """Millicores consumed since the previous call; 0 on the first call."""
        with self._lock:
            now = self.clock()
            current = self.source.usage_micros()

            if not self.state.is_set:
                self.state.update(current, now)
                return 0

            micros_delta = current - self.state.previous_micros
            interval_micros = now - self.state.previous_timestamp
            self.state.update(current, now)

        if interval_micros <= 0:
            return 0
        return round(micros_delta / interval_micros * 1000)

    # ── Limits ────────────────────────────────────────────────────────────

    def limit_millicores(self) -> int:
        return self.source.limit_millicores()

    def limit_cores(self) -> float:
        """CPU limit in (fractional) cores.

        Order: the OS-native figure where the platform has one, the cgroup
        quota, the ``SYSRES_CPU_CORES`` override (sandboxes without cgroup
        files), then the logical CPU count.
        """
        native = self.source.native_limit_cores()
        if native is not None:
            return native

        millicores = self.source.limit_millicores()
        if millicores > 0:
            return millicores / 1000.0

        override = self.override()
        if override is not None:
            logger.debug("cpu_limit_from_override", cores=override)
            return override

        return float(self.source.cpu_count())

    # ── Load ──────────────────────────────────────────────────────────────

    def load(self, millicores: int | None = None) -> float:
        """Usage as a fraction of the limit; 1.0 means the full limit is in use.

        Values above 1.0 are valid and mean the cgroup is bursting or being
        throttled. Pass ``millicores`` to reuse a reading already taken.
        """
        if millicores is None:
            millicores = self.usage_millicores()
        if millicores <= 0:
            return 0.0
        return millicores / (self.limit_cores() * 1000)

    def load_avg(self) -> float:
        """Delta load where CPU time is accounted, else the host load average."""
        if self.source.tracks_cpu_time:
            return self.load()
        return self.source.load_avg()

    def reset(self) -> None:
        with self._lock:
            self.state.clear()
