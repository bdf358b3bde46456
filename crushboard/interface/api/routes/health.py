"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from crushboard.config import Settings
from crushboard.domain.repository import ChangeFeed
from crushboard.util.observability import SERVICE_VERSION

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response.

    ``live_listeners`` counts open live feed and post detail subscriptions.
    """

    status: str
    timestamp: datetime
    version: str
    environment: str
    live_listeners: int


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    change_feed: FromDishka[ChangeFeed],
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=SERVICE_VERSION,
        environment=settings.environment,
        live_listeners=change_feed.listener_count,
    )
