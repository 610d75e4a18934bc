"""Player state endpoints: one-shot view and the live push channel."""

import asyncio
import logging
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.config import settings
from garden_api.database import get_db
from garden_api.dependencies import AuthError, get_current_user, resolve_player_id
from garden_api.repositories import state as state_repo
from garden_api.schemas import PlayerState

logger = logging.getLogger(__name__)

router = APIRouter(tags=["state"])

STATE_UPDATE = "state:update"


@router.get("/me/state", response_model=PlayerState)
async def get_state(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> PlayerState:
    """Full player view: floors, inventory, market, trap pricing and gacha."""
    return await state_repo.get_player_state(db, player_id)


async def push_state(
    websocket: Any, db: AsyncSession, player_id: UUID, interval: float
) -> None:
    """Send a full state snapshot every ``interval`` seconds until the send fails.

    Every message is a complete view, so a client may drop any it missed.
    """
    while True:
        view = await state_repo.get_player_state(db, player_id)
        await websocket.send_json({"type": STATE_UPDATE, "payload": view.model_dump(mode="json")})
        await asyncio.sleep(interval)


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/ws/state")
async def state_socket(
    websocket: WebSocket,
    user_id: str | None = None,
    token: str | None = None,
    db: AsyncSession = Depends(get_db),
) -> None:
    """
    Live player state.

    Authenticates like HTTP: in dev mode a ``user_id`` query parameter (or
    X-User-Id header), in production a ``token`` query parameter.
    """
    try:
        player_id = await resolve_player_id(
            db, token=token, dev_player_id=user_id or websocket.headers.get("x-user-id")
        )
    except AuthError as exc:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason=exc.detail)
        return

    await websocket.accept()
    logger.info("State channel opened for player %s", player_id)

    receiver = asyncio.create_task(_wait_for_disconnect(websocket))
    pusher = asyncio.create_task(
        push_state(websocket, db, player_id, settings.live_push_interval_seconds)
    )
    done, pending = await asyncio.wait({receiver, pusher}, return_when=asyncio.FIRST_COMPLETED)
    for task in pending:
        task.cancel()
    await asyncio.gather(*pending, return_exceptions=True)

    for task in done:
        exc = task.exception()
        if exc is not None and not isinstance(exc, WebSocketDisconnect):
            logger.error("State channel failed for player %s", player_id, exc_info=exc)

    logger.info("State channel closed for player %s", player_id)
