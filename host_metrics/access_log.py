"""Per-request log hook."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional


@dataclass(frozen=True)
class AccessRecord:
    method: str
    path: str
    status_code: int
    duration_ms: float
    client: str
    timestamp: datetime


RequestLogger = Callable[[AccessRecord], None]


class ApacheAccessLogger:
    """Writes one Apache-style line per request to ``host_metrics.access``."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._log = logger or logging.getLogger("host_metrics.access")

    def __call__(self, record: AccessRecord) -> None:
        self._log.info(
            '%s - - [%s] "%s %s HTTP/1.1" %d %dms',
            record.client,
            record.timestamp.strftime("%d/%b/%Y:%H:%M:%S %z"),
            record.method,
            record.path,
            record.status_code,
            record.duration_ms,
        )
