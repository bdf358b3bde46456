"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from crushboard.config import Settings
from crushboard.util.di import PROVIDERS, get_provider


def create_container(settings: Settings | None = None) -> AsyncContainer:
    """Build the production container.

    Args:
        settings: Settings to serve (loaded from the environment if omitted)

    Returns:
        Container with the production implementation of every component
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    # FastapiProvider exposes the Request/WebSocket to providers
    return make_async_container(
        *providers,
        FastapiProvider(),
        context={Settings: settings or Settings()},
    )


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app.

    Routes using DishkaRoute resolve from it per request; the live feed
    routes open their own scope from ``app.state.dishka_container``.
    """
    setup_dishka(container, app)
