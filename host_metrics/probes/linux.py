"""Linux probes: distribution name from os-release."""
from __future__ import annotations

import logging
import platform
from typing import Optional

from .base import Available, Probe, ProbeResult, ProbeSet
from .portable import PlatformIdentityProbe, portable_probes

log = logging.getLogger(__name__)


class OsReleaseIdentityProbe(Probe[str]):
    """Distribution name from os-release, e.g. ``Ubuntu 22.04.4 LTS``."""

    def __init__(self, fallback: Optional[Probe[str]] = None) -> None:
        self.fallback = fallback or PlatformIdentityProbe()

    @property
    def name(self) -> str:
        return "os_identity"

    def sample(self) -> ProbeResult[str]:
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            log.debug("os-release not found, using kernel identity")
            return self.fallback.sample()
        pretty = release.get("PRETTY_NAME")
        if not pretty:
            pretty = " ".join(filter(None, (release.get("NAME"), release.get("VERSION"))))
        if not pretty:
            return self.fallback.sample()
        return Available(pretty)


def linux_probes(cpu_sample_seconds: float = 0.25, disk_path: str = "/") -> ProbeSet:
    return portable_probes(cpu_sample_seconds, disk_path, os_identity=OsReleaseIdentityProbe())
