"""FastAPI application exposing host metrics."""
from __future__ import annotations

import time
from datetime import datetime
from typing import Callable, Optional

from fastapi import FastAPI, HTTPException, Request

from . import __version__
from .access_log import AccessRecord, ApacheAccessLogger, RequestLogger
from .collector import Collector
from .config import Settings, get_settings
from .probes import probes_for_platform

METRICS_ROUTE = "/api/v1/metrics"

Authorizer = Callable[[Request], bool]


def _client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded
    if request.client is not None:
        return request.client.host
    return "-"


def create_app(
    collector: Optional[Collector] = None,
    *,
    settings: Optional[Settings] = None,
    request_logger: Optional[RequestLogger] = None,
    authorizer: Optional[Authorizer] = None,
) -> FastAPI:
    """Build the app.

    ``authorizer`` is not set by default: the endpoint is open to anyone who
    can reach the port.
    """
    settings = settings or get_settings()
    if collector is None:
        collector = Collector(probes_for_platform(settings), timeout=settings.probe_timeout_seconds)
    log_request = request_logger or ApacheAccessLogger()

    app = FastAPI(
        title="Host Metrics Agent",
        description="Serves a live snapshot of host CPU, memory and disk usage.",
        version=__version__,
    )

    @app.middleware("http")
    async def access_log(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        log_request(
            AccessRecord(
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=(time.perf_counter() - started) * 1000,
                client=_client_address(request),
                timestamp=datetime.now().astimezone(),
            )
        )
        return response

    # Runs on a worker thread, one collection per request.
    @app.get(METRICS_ROUTE, summary="Return a fresh host metrics snapshot", tags=["metrics"])
    def metrics(request: Request):
        if authorizer is not None and not authorizer(request):
            raise HTTPException(status_code=401, detail="Unauthorized")
        return collector.sample_all().to_dict()

    return app
