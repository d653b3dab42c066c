"""Platform probes and the per-platform probe sets."""
from __future__ import annotations

import sys
from typing import Optional

from ..config import Settings, get_settings
from .base import Available, Error, Probe, ProbeResult, ProbeSet, Unsupported
from .darwin import darwin_probes
from .linux import linux_probes
from .portable import portable_probes
from .windows import windows_probes

__all__ = [
    "Available",
    "Error",
    "Probe",
    "ProbeResult",
    "ProbeSet",
    "Unsupported",
    "probes_for_platform",
]


def probes_for_platform(settings: Optional[Settings] = None, platform: str = sys.platform) -> ProbeSet:
    """Pick the probe set for *platform* (a ``sys.platform`` value)."""
    settings = settings or get_settings()
    if platform.startswith("linux"):
        factory = linux_probes
    elif platform == "win32":
        factory = windows_probes
    elif platform == "darwin":
        factory = darwin_probes
    else:
        factory = portable_probes
    return factory(settings.cpu_sample_seconds, settings.disk_path)
