"""Live feed routes (WebSocket).

Each socket holds one live query open. Messages are JSON objects:

- ``{"type": "snapshot", "data": {...}}`` whenever the result changes
- ``{"type": "not_found", "data": {"message": ...}}`` before closing when
  the requested post does not exist

Snapshots are read through short-lived readers, so an open socket holds no
database connection while it waits.
"""

from typing import Any, AsyncIterator, Awaitable, Callable, Optional
from uuid import UUID

import anyio
import logfire
from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel
from starlette.websockets import WebSocketState

from crushboard.application.usecase.post import (
    GetPostRequest,
    ListPostsRequest,
    PostDetailResponse,
    WatchPostsUseCase,
    WatchPostUseCase,
)
from crushboard.config import FeedSettings
from crushboard.domain.service import JWTService
from crushboard.domain.value import PrimaryTag, SortMode
from crushboard.interface.api.routes.auth import AUTH_COOKIE

router = APIRouter(prefix="/posts", tags=["live"])

# Application-defined close code (4000-4999), mirrors HTTP 404
CLOSE_NOT_FOUND = 4404


@router.websocket("/live")
async def live_posts(
    websocket: WebSocket,
    sort: SortMode = SortMode.NEW,
    tag: Optional[PrimaryTag] = None,
) -> None:
    """Stream the post feed as it changes."""
    await websocket.accept()

    container: AsyncContainer = websocket.app.state.dishka_container
    async with container() as request_container:
        jwt_service = await request_container.get(JWTService)
        use_case = await request_container.get(WatchPostsUseCase)
        feed_settings = await request_container.get(FeedSettings)

        request = ListPostsRequest(
            sort=sort,
            tag=tag,
            limit=feed_settings.page_size,
            user_id=jwt_service.get_user_id_from_token(websocket.cookies.get(AUTH_COOKIE)),
        )
        with logfire.span("live.posts", sort=sort.value, tag=tag.value if tag else None):
            async with use_case.subscribe(request) as snapshots:
                await _stream(websocket, snapshots)


@router.websocket("/{post_id}/live")
async def live_post(websocket: WebSocket, post_id: UUID) -> None:
    """Stream one post and its replies as they change."""
    await websocket.accept()

    container: AsyncContainer = websocket.app.state.dishka_container
    async with container() as request_container:
        jwt_service = await request_container.get(JWTService)
        use_case = await request_container.get(WatchPostUseCase)

        request = GetPostRequest(
            post_id=str(post_id),
            user_id=jwt_service.get_user_id_from_token(websocket.cookies.get(AUTH_COOKIE)),
        )
        with logfire.span("live.post", post_id=str(post_id)):
            async with use_case.subscribe(request) as snapshots:
                await _stream(websocket, snapshots, is_missing=_post_missing)


def _post_missing(snapshot: PostDetailResponse) -> bool:
    return snapshot.post is None


async def _stream(
    websocket: WebSocket,
    snapshots: AsyncIterator[BaseModel],
    is_missing: Callable[[Any], bool] = lambda snapshot: False,
) -> None:
    """Send snapshots until the client leaves or the subject disappears.

    Sending and reading run in one task group. The client's messages are
    read and ignored, so a disconnect ends the stream even while no snapshot
    is pending. Whichever side finishes first cancels the other.
    """

    async def send_snapshots() -> None:
        async for snapshot in snapshots:
            if is_missing(snapshot):
                await websocket.send_json(
                    {"type": "not_found", "data": {"message": "Post not found"}}
                )
                await websocket.close(code=CLOSE_NOT_FOUND)
                return
            await websocket.send_json(
                {"type": "snapshot", "data": snapshot.model_dump(mode="json")}
            )

    async def wait_for_disconnect() -> None:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                return

    async with anyio.create_task_group() as tg:

        async def run_until_done(part: Callable[[], Awaitable[None]]) -> None:
            try:
                await part()
            except WebSocketDisconnect:
                logfire.info("Live client disconnected")
            except Exception as e:
                logfire.error(
                    "Live stream failed", error=str(e), error_type=type(e).__name__
                )
                if websocket.application_state == WebSocketState.CONNECTED:
                    await websocket.close(code=status.WS_1011_INTERNAL_ERROR)
            finally:
                tg.cancel_scope.cancel()

        tg.start_soon(run_until_done, send_snapshots)
        tg.start_soon(run_until_done, wait_for_disconnect)
