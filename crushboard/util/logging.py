"""Stdlib logging setup.

Library loggers (uvicorn, sqlalchemy, alembic) are routed into Logfire so
their records land next to the service spans.
"""

import logging

import logfire

from crushboard.config import Settings

# Loggers that are too chatty at INFO for a live-feed service
QUIET_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "websockets")


def setup_logging(settings: Settings) -> None:
    """Send stdlib log records through Logfire.

    Args:
        settings: Application settings
    """
    level = logging.DEBUG if settings.debug else logging.INFO

    logging.basicConfig(
        level=level,
        handlers=[logfire.LogfireLoggingHandler()],
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("crushboard").setLevel(level)
