"""Probe contract shared by every platform implementation."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, Generic, Iterator, Tuple, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Available(Generic[T]):
    value: T


@dataclass(frozen=True)
class Unsupported:
    """The platform has no way to provide this metric."""

    reason: str = "not supported on this platform"


@dataclass(frozen=True)
class Error:
    """The platform call failed unexpectedly."""

    reason: str


ProbeResult = Union[Available[T], Unsupported, Error]


class Probe(ABC, Generic[T]):
    """Reads one metric family from the host."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Probe name used in log messages."""
        ...

    @abstractmethod
    def sample(self) -> ProbeResult[T]:
        """Read the current value.

        Expected platform gaps are reported as ``Unsupported``. Anything raised
        from here is turned into ``Error`` by the collector.
        """
        ...


@dataclass(frozen=True)
class ProbeSet:
    """The probes a platform has to provide.

    The first five are the metric families; core counts and kernel version are
    extra host details.
    """

    cpu_usage: Probe[float]
    cpu_frequency: Probe[float]
    memory: Probe[Any]
    disk: Probe[Any]
    os_identity: Probe[str]
    cpu_cores: Probe[Any]
    kernel_version: Probe[str]

    def items(self) -> Iterator[Tuple[str, Probe[Any]]]:
        for item in fields(self):
            yield item.name, getattr(self, item.name)
