from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any

import pytest

from host_metrics.collector import Collector
from host_metrics.config import get_settings
from host_metrics.probes.base import Available, Probe, ProbeResult, ProbeSet, Unsupported
from host_metrics.snapshot import CoreCounts, DiskMetrics, MemoryMetrics

FIXED_NOW = datetime(2026, 10, 17, 9, 30, 12, tzinfo=timezone.utc)


class StubProbe(Probe[Any]):
    """Returns a canned result, optionally after a delay or by raising."""

    def __init__(self, result: Any = None, *, delay: float = 0.0, raises: Exception | None = None) -> None:
        self.result = result if result is not None else Unsupported()
        self.delay = delay
        self.raises = raises
        self.calls = 0

    @property
    def name(self) -> str:
        return "stub"

    def sample(self) -> ProbeResult[Any]:
        self.calls += 1
        if self.delay:
            time.sleep(self.delay)
        if self.raises is not None:
            raise self.raises
        return self.result


def make_probe_set(**overrides: StubProbe) -> ProbeSet:
    probes = {
        "cpu_usage": StubProbe(Available(37.5)),
        "cpu_frequency": StubProbe(Available(2400.0)),
        "memory": StubProbe(Available(MemoryMetrics.from_counts(8_000_000_000, 4_000_000_000, 4_000_000_000))),
        "disk": StubProbe(Available(DiskMetrics.from_counts(1_000, 250, free=750, mount="/"))),
        "os_identity": StubProbe(Available("Ubuntu 22.04.4 LTS")),
        "cpu_cores": StubProbe(Available(CoreCounts(logical=8, physical=4))),
        "kernel_version": StubProbe(Available("6.8.0-45-generic")),
    }
    probes.update(overrides)
    return ProbeSet(**probes)


def make_collector(timeout: float = 2.0, **overrides: StubProbe) -> Collector:
    return Collector(make_probe_set(**overrides), timeout=timeout, clock=lambda: FIXED_NOW)


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
