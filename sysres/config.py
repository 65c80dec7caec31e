"""sysres configuration — loaded from .env via pydantic-settings."""

from __future__ import annotations

import math

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

logger = structlog.get_logger().bind(component="sysres.config")


class SysresSettings(BaseSettings):
    """All sysres configuration. Reads SYSRES_* from .env and the environment."""

    # --- CPU ---
    cpu_cores: float | None = Field(
        default=None,
        description="CPU core count used when no cgroup CPU limit is readable (gVisor)",
    )

    # --- Filesystem ---
    fs_root: str = Field(
        default="/",
        description="Prefix for every /sys and /proc path, e.g. /host in a sidecar",
    )

    # --- Logging ---
    log_level: str = Field(default="WARNING", description="Log level")
    log_format: str = Field(
        default="console",
        description="Log format: 'console' for dev, 'json' for production",
    )

    model_config = {
        "env_prefix": "SYSRES_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("cpu_cores", mode="before")
    @classmethod
    def _lenient_cpu_cores(cls, value):
        """A malformed override counts as unset instead of failing the import."""
        if value is None or isinstance(value, (int, float)):
            return value
        text = str(value).strip()
        if not text:
            return None
        try:
            cores = float(text)
        except ValueError:
            cores = None
        if cores is None or not math.isfinite(cores):
            logger.warning("cpu_cores_override_invalid", value=text)
            return None
        return cores


# Singleton for process-wide defaults. CPU overrides are re-read at call time.
settings = SysresSettings()
