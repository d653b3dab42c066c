"""macOS probes."""
from __future__ import annotations

import platform

from .base import Available, Probe, ProbeResult, ProbeSet
from .portable import PlatformIdentityProbe, portable_probes


class MacIdentityProbe(Probe[str]):
    @property
    def name(self) -> str:
        return "os_identity"

    def sample(self) -> ProbeResult[str]:
        release = platform.mac_ver()[0]
        if not release:
            return PlatformIdentityProbe().sample()
        return Available(f"macOS {release}")


def darwin_probes(cpu_sample_seconds: float = 0.25, disk_path: str = "/") -> ProbeSet:
    return portable_probes(cpu_sample_seconds, disk_path, os_identity=MacIdentityProbe())
