"""Audit log of state-changing player actions."""

import logging
from typing import Any
from uuid import UUID

from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.models import ActionLog

logger = logging.getLogger(__name__)


async def record_action(
    db: AsyncSession,
    player_id: UUID | None,
    action: str,
    payload: dict[str, Any] | None = None,
) -> None:
    """Append an entry in the caller's transaction; it commits or rolls back with it."""
    payload = jsonable_encoder(payload or {})
    db.add(ActionLog(player_id=player_id, action=action, payload=payload))
    logger.info("action=%s player=%s payload=%s", action, player_id, payload)

