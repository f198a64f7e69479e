#!/usr/bin/env python3
"""Serve the Spark API with uvicorn.

Logfire is configured before the app module is imported so that startup
failures (bad settings, unreachable gateway config) are reported too.
"""

import sys

import logfire
import uvicorn

from spark.config import Settings
from spark.util.logging import setup_logging
from spark.util.observability import configure_logfire

APP_PATH = "spark.interface.api.app:app"


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info(
        "Starting Spark API",
        port=settings.port,
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
    try:
        uvicorn.run(
            APP_PATH,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception:
        logfire.exception("Spark API failed to start")
        raise
    return 0


if __name__ == "__main__":
    sys.exit(main())
