"""Root conftest — shared pytest markers.

Markers
-------
unit        fast, pure logic against a synthetic filesystem
live        reads the real /proc and /sys of the machine running the tests
"""

from __future__ import annotations

import sys

import pytest


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests against a synthetic filesystem")
    config.addinivalue_line("markers", "live: reads the real /proc and /sys")


# ── Skip guards ───────────────────────────────────────────────────────────────

requires_linux = pytest.mark.skipif(
    not sys.platform.startswith("linux"),
    reason="Reads Linux pseudo-files",
)
