"""CLI entrypoint for launching the metrics agent with Uvicorn."""
from __future__ import annotations

import logging

import uvicorn

from .api import METRICS_ROUTE, create_app
from .config import get_settings

log = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    app = create_app(settings=settings)
    log.info("Listening on http://%s:%d%s", settings.host, settings.port, METRICS_ROUTE)

    # Requests are logged by the app's own access hook.
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
        access_log=False,
    )


if __name__ == "__main__":
    main()
