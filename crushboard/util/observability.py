"""Logfire setup for the API and the migration script.

Services open spans through ``Service.span`` and log with ``logfire.info``;
this module only configures where that output goes.
"""

from typing import Any

import logfire
from fastapi import FastAPI, Request, WebSocket
from sqlalchemy.ext.asyncio import AsyncEngine

from crushboard.config import Settings

SERVICE_NAME = "crushboard-api"
SERVICE_VERSION = "0.1.0"

# Identity-document references must never reach the trace backend.
SCRUB_PATTERNS = ["id_card", "auth_token"]

# Polled by load balancers; tracing it only adds noise.
EXCLUDED_URLS = "/health"


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire from the observability settings.

    Sending to the Logfire backend follows ``send_to_logfire`` when set and
    otherwise turns on when a token is configured.
    """
    observability = settings.observability
    send_to_logfire = observability.send_to_logfire
    if send_to_logfire is None:
        send_to_logfire = bool(observability.logfire_token)

    logfire.configure(
        service_name=SERVICE_NAME,
        service_version=SERVICE_VERSION,
        environment=settings.environment,
        token=observability.logfire_token or None,
        send_to_logfire=send_to_logfire,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUB_PATTERNS),
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            verbose=settings.debug,
        ),
    )
    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace HTTP requests and live-feed WebSocket sessions."""

    def request_attributes(
        request: Request | WebSocket, attributes: dict[str, Any]
    ) -> dict[str, Any]:
        result = dict(attributes)
        # Only HTTP requests carry a method; WebSockets do not
        method = getattr(request, "method", None)
        if method:
            result["method"] = method
        result["path"] = request.url.path
        return result

    logfire.instrument_fastapi(
        app,
        request_attributes_mapper=request_attributes,
        excluded_urls=EXCLUDED_URLS,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries issued by the record store."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
