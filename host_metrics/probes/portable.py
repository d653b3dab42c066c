"""Probes built on psutil and the platform module.

These work wherever psutil does and are the building blocks the
platform-specific probe sets fall back to.
"""
from __future__ import annotations

import platform
import time
from typing import Any, Callable, Optional, Tuple

import psutil

from ..snapshot import CoreCounts, DiskMetrics, MemoryMetrics, clamp_percent
from .base import Available, Error, Probe, ProbeResult, ProbeSet, Unsupported


def _busy_and_total(times: Any) -> Tuple[float, float]:
    total = sum(times)
    # guest time is already counted in user/nice on Linux
    total -= getattr(times, "guest", 0.0) + getattr(times, "guest_nice", 0.0)
    idle = times.idle + getattr(times, "iowait", 0.0)
    return total - idle, total


class CpuUsageProbe(Probe[float]):
    """Busy percentage over a short window between two CPU time readings."""

    def __init__(
        self,
        interval: float = 0.25,
        read_times: Callable[[], Any] = psutil.cpu_times,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.interval = interval
        self._read_times = read_times
        self._sleep = sleep

    @property
    def name(self) -> str:
        return "cpu_usage"

    def sample(self) -> ProbeResult[float]:
        busy_before, total_before = _busy_and_total(self._read_times())
        self._sleep(self.interval)
        busy_after, total_after = _busy_and_total(self._read_times())

        total_delta = total_after - total_before
        busy_delta = busy_after - busy_before
        if total_delta <= 0:
            return Unsupported("no CPU time elapsed between readings")
        if busy_delta < 0:
            return Unsupported("CPU time counters went backwards")
        return Available(clamp_percent(busy_delta / total_delta * 100))


class PsutilCpuFrequencyProbe(Probe[float]):
    """Current clock speed as reported by ``psutil.cpu_freq``."""

    @property
    def name(self) -> str:
        return "cpu_frequency"

    def sample(self) -> ProbeResult[float]:
        cpu_freq = getattr(psutil, "cpu_freq", None)
        if cpu_freq is None:
            return Unsupported("psutil has no cpu_freq on this platform")
        try:
            freq = cpu_freq()
        except NotImplementedError:
            return Unsupported("psutil cannot read the CPU frequency here")
        if not freq or freq.current <= 0:
            return Unsupported("CPU frequency is not exposed")
        return Available(round(float(freq.current), 2))


class MemoryProbe(Probe[MemoryMetrics]):
    """Physical memory; reclaimable cache and buffers do not count as used."""

    @property
    def name(self) -> str:
        return "memory"

    def sample(self) -> ProbeResult[MemoryMetrics]:
        vm = psutil.virtual_memory()
        total = int(vm.total)
        if total <= 0:
            return Error("reported total memory is zero")
        available = min(int(vm.available), total)
        return Available(MemoryMetrics.from_counts(total, total - available, available))


class DiskProbe(Probe[DiskMetrics]):
    """Usage of the volume the OS lives on."""

    def __init__(self, path: str = "/") -> None:
        self.path = path

    @property
    def name(self) -> str:
        return "disk"

    def sample(self) -> ProbeResult[DiskMetrics]:
        usage = psutil.disk_usage(self.path)
        if usage.total <= 0:
            return Error(f"volume {self.path} reports zero size")
        return Available(
            DiskMetrics.from_counts(usage.total, usage.used, free=int(usage.free), mount=self.path)
        )


class PlatformIdentityProbe(Probe[str]):
    """``<system> <release>`` from the platform module."""

    @property
    def name(self) -> str:
        return "os_identity"

    def sample(self) -> ProbeResult[str]:
        system = platform.system()
        if not system:
            return Error("platform could not be detected")
        return Available(f"{system} {platform.release()}".strip())


class CoreCountProbe(Probe[CoreCounts]):
    """Logical and physical core counts from ``psutil.cpu_count``."""

    @property
    def name(self) -> str:
        return "cpu_cores"

    def sample(self) -> ProbeResult[CoreCounts]:
        logical = psutil.cpu_count(logical=True)
        physical = psutil.cpu_count(logical=False)
        if not logical and not physical:
            return Unsupported("core counts are not exposed")
        return Available(CoreCounts(logical=logical or None, physical=physical or None))


class KernelVersionProbe(Probe[str]):
    @property
    def name(self) -> str:
        return "kernel_version"

    def sample(self) -> ProbeResult[str]:
        release = platform.release()
        if not release:
            return Unsupported("kernel release is not reported")
        return Available(release)


def portable_probes(
    cpu_sample_seconds: float = 0.25,
    disk_path: str = "/",
    cpu_frequency: Optional[Probe[float]] = None,
    os_identity: Optional[Probe[str]] = None,
) -> ProbeSet:
    return ProbeSet(
        cpu_usage=CpuUsageProbe(cpu_sample_seconds),
        cpu_frequency=cpu_frequency or PsutilCpuFrequencyProbe(),
        memory=MemoryProbe(),
        disk=DiskProbe(disk_path),
        os_identity=os_identity or PlatformIdentityProbe(),
        cpu_cores=CoreCountProbe(),
        kernel_version=KernelVersionProbe(),
    )
