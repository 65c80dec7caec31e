"""PlatformDetector — classifies the runtime once and caches the answer.

Detection order (first match wins):
    1. non-Linux, non-Windows OS        → MACOS_HOST
    2. <cgroup mount>/cpu.stat present   → LINUX_CGROUP_V2
    3. cpuacct.usage present (either v1 layout) → LINUX_CGROUP_V1
    4. other Linux                       → LINUX_HOST
    5. anything else (Windows)           → UNSUPPORTED

Container classification and the cgroup v2 directory are derived from the
same probe and cached alongside the platform. ``clear_cache()`` drops all
three together.
"""

from __future__ import annotations

import sys
import threading

from sysres import paths
from sysres.models.platform import CgroupVersion, Platform
from sysres.probe import FileProbe, parse_int
from sysres.utils import get_logger

logger = get_logger("detector")


def platform_for_os(system: str) -> Platform | None:
    """Classify by ``sys.platform`` alone. None means "Linux, keep probing"."""
    if system.startswith("linux"):
        return None
    if system.startswith(("win32", "cygwin", "msys")):
        return Platform.UNSUPPORTED
    return Platform.MACOS_HOST


def parse_self_cgroup(content: str, mount: str = paths.CGROUP_V2_MOUNT) -> str | None:
    """Find the unified-hierarchy entry in ``/proc/self/cgroup`` content.

    Lines look like ``hierarchy-id:controller-list:cgroup-path``; the v2
    entry is ``0::<path>``. Containers usually see ``0::/`` (their own
    namespace root), while host processes under systemd see something like
    ``0::/user.slice/user-1000.slice/session-2.scope``.
    """
    for line in content.splitlines():
        line = line.strip()
        if not line:
            continue
        parts = line.split(":", 2)
        if len(parts) != 3:
            continue
        hierarchy_id, controllers, cgroup_path = parts
        if hierarchy_id != "0" or controllers:
            continue
        if cgroup_path == "/":
            return mount
        return mount + cgroup_path.rstrip("/")
    return None


class PlatformDetector:
    """Detects platform, container confinement and the cgroup v2 directory.

    Args:
        probe:  FileProbe used for every filesystem check.
        system: OS identifier in ``sys.platform`` form; defaults to the
                running interpreter's.

    Construction performs no I/O. All results are computed lazily and held
    until ``clear_cache()``.
    """

    def __init__(self, probe: FileProbe, system: str | None = None) -> None:
        self.probe = probe
        self.system = system if system is not None else sys.platform
        self._lock = threading.RLock()
        self._platform: Platform | None = None
        self._is_container: bool | None = None
        self._cgroup_dir: str | None = None

    # ── Platform ──────────────────────────────────────────────────────────

    def detect_platform(self) -> Platform:
        with self._lock:
            if self._platform is None:
                self._platform = self._probe_platform()
                logger.debug("platform_detected", platform=self._platform.value, system=self.system)
            return self._platform

    def _probe_platform(self) -> Platform:
        by_os = platform_for_os(self.system)
        if by_os is not None:
            return by_os
        if self.probe.exists(paths.CGROUP_V2_ROOT_CPU_STAT):
            return Platform.LINUX_CGROUP_V2
        if self.probe.exists(paths.CGROUP_V1_CPUACCT_USAGE) or self.probe.exists(
            paths.CGROUP_V1_CPUACCT_USAGE_ALT
        ):
            return Platform.LINUX_CGROUP_V1
        return Platform.LINUX_HOST

    def detect_version(self) -> CgroupVersion:
        return self.detect_platform().cgroup_version

    # ── Cgroup v2 directory ───────────────────────────────────────────────

    def resolve_cgroup_dir(self) -> str:
        """Absolute directory holding this process's cgroup v2 controller files.

        Falls back to the mount root when ``/proc/self/cgroup`` is unreadable
        or has no unified entry.
        """
        with self._lock:
            if self._cgroup_dir is None:
                content = self.probe.read(paths.PROC_SELF_CGROUP)
                resolved = parse_self_cgroup(content) if content is not None else None
                if resolved is None:
                    logger.debug("cgroup_dir_fallback", path=paths.CGROUP_V2_MOUNT)
                    resolved = paths.CGROUP_V2_MOUNT
                self._cgroup_dir = resolved
            return self._cgroup_dir

    def cgroup_v2_file(self, name: str) -> str:
        return f"{self.resolve_cgroup_dir()}/{name}"

    # ── Container classification ──────────────────────────────────────────

    def is_container_env(self) -> bool:
        """True when a finite memory limit confines this process's cgroup."""
        with self._lock:
            if self._is_container is None:
                platform = self.detect_platform()
                if platform is Platform.LINUX_CGROUP_V2:
                    self._is_container = self._container_v2()
                elif platform is Platform.LINUX_CGROUP_V1:
                    self._is_container = self._container_v1()
                else:
                    self._is_container = False
                logger.debug("container_classified", is_container=self._is_container)
            return self._is_container

    def _container_v2(self) -> bool:
        content = self.probe.read(self.cgroup_v2_file(paths.MEMORY_MAX))
        if content is None or content == "max":
            return False
        return parse_int(content) is not None

    def _container_v1(self) -> bool:
        limit = parse_int(self.probe.read(paths.CGROUP_V1_MEMORY_LIMIT))
        return limit is not None and limit < paths.CGROUP_V1_NO_LIMIT_THRESHOLD

    def clear_cache(self) -> None:
        with self._lock:
            self._platform = None
            self._is_container = None
            self._cgroup_dir = None
