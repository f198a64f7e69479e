"""Logfire setup for the Spark API.

Services log and trace through ``logfire`` directly::

    import logfire

    logfire.info("Vote cast", voter_id=str(voter_id), delta=delta)

    with logfire.span("recommendation_engine.recommend", user_id=str(user_id)):
        ...

This module only configures the SDK and instruments the libraries the
request path goes through: FastAPI, the SQLAlchemy engine, and the httpx
client that posts vote updates to the realtime gateway.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from spark.config import Settings

SERVICE_NAME = "spark-api"

# Session cookie carries the JWT, never export it with captured headers
SCRUB_PATTERNS = ["auth_token", "cookie"]


def _should_send(settings: Settings) -> bool:
    """Explicit setting wins, otherwise send only when a token is present."""
    if settings.observability.send_to_logfire is not None:
        return settings.observability.send_to_logfire
    return bool(settings.observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at process start.

    Development keeps everything local with verbose console output unless
    ``OBSERVABILITY__LOGFIRE_TOKEN`` is set. The deployed git SHA is
    reported as the service version.

    Args:
        settings: Application settings
    """
    send_to_logfire = _should_send(settings)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        realtime_gateway=settings.realtime.gateway_url,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every HTTP request handled by the app.

    Args:
        app: FastAPI application instance
    """

    def _map_request_attributes(request, attributes):
        result = {**attributes, "path": request.url.path}
        if hasattr(request, "method"):
            result["method"] = request.method
        return result

    logfire.instrument_fastapi(
        app,
        capture_headers=True,
        request_attributes_mapper=_map_request_attributes,
        excluded_urls="/health",
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace SQL statements, including the ledger's savepoints and increments.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace broadcast requests posted to the realtime gateway."""
    logfire.instrument_httpx()
