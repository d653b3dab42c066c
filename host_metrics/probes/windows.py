"""Windows probes: PDH clock counter and Windows edition."""
from __future__ import annotations

import platform
import time
from typing import Any, Callable, Optional

from .base import Available, Error, Probe, ProbeResult, ProbeSet, Unsupported
from .portable import portable_probes

FREQUENCY_COUNTER = "\\Processor Information(0,0)\\Processor Frequency"


def _load_pdh() -> Any:
    import win32pdh

    return win32pdh


class PdhCpuFrequencyProbe(Probe[float]):
    """Live clock from the ``Processor Frequency`` performance counter.

    PDH needs two collections to produce a formatted value, so the query is
    collected twice ``interval`` seconds apart.
    """

    def __init__(
        self,
        counter_path: str = FREQUENCY_COUNTER,
        interval: float = 0.12,
        pdh: Optional[Any] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.counter_path = counter_path
        self.interval = interval
        self._pdh = pdh
        self._sleep = sleep

    @property
    def name(self) -> str:
        return "cpu_frequency"

    def sample(self) -> ProbeResult[float]:
        pdh = self._pdh or _load_pdh()
        try:
            query = pdh.OpenQuery()
        except pdh.error as exc:
            return Error(f"PdhOpenQuery failed: {exc}")
        try:
            try:
                counter = pdh.AddCounter(query, self.counter_path)
            except pdh.error:
                return Unsupported(f"counter {self.counter_path} is not available")
            try:
                pdh.CollectQueryData(query)
                self._sleep(self.interval)
                pdh.CollectQueryData(query)
                _, mhz = pdh.GetFormattedCounterValue(counter, pdh.PDH_FMT_LARGE)
            except pdh.error as exc:
                return Error(f"PDH collection failed: {exc}")
        finally:
            pdh.CloseQuery(query)
        if mhz <= 0:
            return Unsupported("processor frequency counter reads zero")
        return Available(float(mhz))


class WindowsIdentityProbe(Probe[str]):
    """Edition and build, e.g. ``Windows 10 Professional (10.0.19045)``."""

    @property
    def name(self) -> str:
        return "os_identity"

    def sample(self) -> ProbeResult[str]:
        release, version, _, _ = platform.win32_ver()
        if not release:
            return Error("Windows version could not be detected")
        edition = platform.win32_edition() or ""
        name = " ".join(filter(None, ("Windows", release, edition)))
        if version:
            name = f"{name} ({version})"
        return Available(name)


def windows_probes(cpu_sample_seconds: float = 0.25, disk_path: str = "C:\\") -> ProbeSet:
    return portable_probes(
        cpu_sample_seconds,
        disk_path,
        cpu_frequency=PdhCpuFrequencyProbe(),
        os_identity=WindowsIdentityProbe(),
    )
