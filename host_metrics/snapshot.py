"""Point-in-time metric snapshot and its JSON representation."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional


def clamp_percent(value: float) -> float:
    return round(min(100.0, max(0.0, float(value))), 2)


def percent_of(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return clamp_percent(part / whole * 100)


def _compact(values: Dict[str, Any]) -> Dict[str, Any]:
    """Drop fields that could not be measured; they are never sent as null."""
    return {key: value for key, value in values.items() if value is not None}


@dataclass(frozen=True)
class CoreCounts:
    logical: Optional[int] = None
    physical: Optional[int] = None


@dataclass(frozen=True)
class CpuMetrics:
    usage_percent: Optional[float] = None
    frequency_mhz: Optional[float] = None
    logical_cores: Optional[int] = None
    physical_cores: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(asdict(self))


@dataclass(frozen=True)
class MemoryMetrics:
    total_bytes: int
    used_bytes: int
    used_percent: float
    available_bytes: Optional[int] = None

    @classmethod
    def from_counts(cls, total: int, used: int, available: Optional[int] = None) -> "MemoryMetrics":
        used = min(max(0, int(used)), int(total))
        return cls(
            total_bytes=int(total),
            used_bytes=used,
            used_percent=percent_of(used, int(total)),
            available_bytes=available,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact(asdict(self))


@dataclass(frozen=True)
class DiskMetrics:
    total_bytes: int
    used_bytes: int
    used_percent: float
    free_bytes: Optional[int] = None
    mount: Optional[str] = None

    @classmethod
    def from_counts(
        cls,
        total: int,
        used: int,
        free: Optional[int] = None,
        mount: Optional[str] = None,
    ) -> "DiskMetrics":
        used = min(max(0, int(used)), int(total))
        return cls(
            total_bytes=int(total),
            used_bytes=used,
            used_percent=percent_of(used, int(total)),
            free_bytes=free,
            mount=mount,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _compact(asdict(self))


@dataclass(frozen=True)
class Snapshot:
    """One sampling of the host.

    Built once per request by the collector and thrown away after it has been
    serialized. Metric groups that could not be read at all are ``None``.
    """

    timestamp: datetime
    os_name: str
    cpu: CpuMetrics = field(default_factory=CpuMetrics)
    memory: Optional[MemoryMetrics] = None
    disk: Optional[DiskMetrics] = None
    kernel_version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "timestamp": self.timestamp.isoformat(timespec="seconds"),
            "os": self.os_name,
        }
        if self.kernel_version is not None:
            payload["kernel_version"] = self.kernel_version
        cpu = self.cpu.to_dict()
        if cpu:
            payload["cpu"] = cpu
        if self.memory is not None:
            payload["memory"] = self.memory.to_dict()
        if self.disk is not None:
            payload["disk"] = self.disk.to_dict()
        return payload
