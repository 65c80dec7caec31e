"""Centralised clock — single source of truth for 'now' in CPU delta math.

The CPU rate computation divides consumed CPU time by elapsed time, so it
needs a clock that never jumps backwards. Everything that needs "now"
imports from here, which also makes test-time mocking trivial (patch one
function, or pass a fake clock to ResourceMonitor).

Usage:
    from sysres.utils.clock import now_micros
"""

from __future__ import annotations

import time


def now_micros() -> int:
    """Monotonic timestamp in microseconds. Only differences are meaningful."""
    return time.monotonic_ns() // 1000
