"""Runtime configuration helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_PORT = 59232


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def _resolve_disk_path() -> str:
    root = os.getenv("HOST_METRICS_DISK_PATH")
    if root:
        return str(Path(root).expanduser().resolve())
    if os.name == "nt":
        drive = os.getenv("SystemDrive", "C:")
        return drive.rstrip("\\") + "\\"
    return "/"


@dataclass(frozen=True)
class Settings:
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "info"
    cpu_sample_seconds: float = 0.25
    probe_timeout_seconds: float = 2.0
    disk_path: str = "/"

    def __post_init__(self) -> None:
        # The CPU measurement window has to fit inside the probe deadline.
        cpu_sample = min(self.cpu_sample_seconds, self.probe_timeout_seconds / 2)
        object.__setattr__(self, "cpu_sample_seconds", cpu_sample)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    port = _int_env("PORT", DEFAULT_PORT)
    if not 0 < port < 65536:
        port = DEFAULT_PORT
    return Settings(
        host=os.getenv("HOST_METRICS_HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("HOST_METRICS_LOG_LEVEL", "info").lower(),
        cpu_sample_seconds=_float_env("HOST_METRICS_CPU_SAMPLE_SECONDS", 0.25),
        probe_timeout_seconds=_float_env("HOST_METRICS_PROBE_TIMEOUT_SECONDS", 2.0),
        disk_path=_resolve_disk_path(),
    )
