"""Runs every probe and assembles the snapshot."""
from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, TypeVar

from .probes.base import Available, Error, ProbeResult, ProbeSet, Unsupported
from .snapshot import CoreCounts, CpuMetrics, Snapshot

log = logging.getLogger(__name__)

UNKNOWN_OS = "unknown"

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def value_or(result: ProbeResult[T], default: Optional[T] = None) -> Optional[T]:
    if isinstance(result, Available):
        return result.value
    return default


class Collector:
    """Samples all probes of a :class:`ProbeSet` into one :class:`Snapshot`.

    Probes run side by side on a thread pool created for each call. A probe
    that raises or misses ``timeout`` seconds is reported as ``Error`` and its
    fields are left out; one failing probe never fails the whole snapshot.
    Nothing is cached, every call reads the host again.

    A probe that never returns (``disk_usage`` on a hung network mount, say)
    keeps its worker thread busy for good: one thread is lost per call, and
    interpreter shutdown waits on those threads because ``concurrent.futures``
    joins its workers at exit.
    """

    def __init__(
        self,
        probes: ProbeSet,
        timeout: float = 2.0,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.probes = probes
        self.timeout = timeout
        self._clock = clock

    def sample_all(self) -> Snapshot:
        results = self._run_probes()
        cores = value_or(results["cpu_cores"], CoreCounts())
        return Snapshot(
            timestamp=self._clock(),
            os_name=value_or(results["os_identity"], UNKNOWN_OS),
            kernel_version=value_or(results["kernel_version"]),
            cpu=CpuMetrics(
                usage_percent=value_or(results["cpu_usage"]),
                frequency_mhz=value_or(results["cpu_frequency"]),
                logical_cores=cores.logical,
                physical_cores=cores.physical,
            ),
            memory=value_or(results["memory"]),
            disk=value_or(results["disk"]),
        )

    def _run_probes(self) -> Dict[str, ProbeResult[Any]]:
        probes = list(self.probes.items())
        executor = ThreadPoolExecutor(max_workers=len(probes), thread_name_prefix="probe")
        try:
            futures = {name: executor.submit(probe.sample) for name, probe in probes}
            deadline = time.monotonic() + self.timeout
            return {
                name: self._resolve(name, future, max(0.0, deadline - time.monotonic()))
                for name, future in futures.items()
            }
        finally:
            # Probes still running past their deadline are abandoned.
            executor.shutdown(wait=False, cancel_futures=True)

    def _resolve(self, name: str, future: Future, remaining: float) -> ProbeResult[Any]:
        try:
            result = future.result(timeout=remaining)
        except FutureTimeoutError:
            result = Error(f"timed out after {self.timeout:g}s")
        except Exception as exc:
            result = Error(f"{type(exc).__name__}: {exc}")

        if isinstance(result, Error):
            log.warning("Probe %s failed: %s", name, result.reason)
        elif isinstance(result, Unsupported):
            log.debug("Probe %s unsupported: %s", name, result.reason)
        return result
