"""Player repository - login, sessions and the starter setup."""

import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.config import settings
from garden_api.database import transaction
from garden_api.errors import NotFound
from garden_api.models import Floor, Player, Session
from garden_api.repositories import action_log, floor, gacha
from garden_api.schemas import AuthResponse, PlayerResponse, SessionResponse


def generate_session_token() -> str:
    """Generate a secure random session token."""
    return secrets.token_hex(32)


def _ensure_utc(dt: datetime) -> datetime:
    """Ensure datetime is timezone-aware (UTC). SQLite returns naive datetimes."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt


def _to_schema(player: Player) -> PlayerResponse:
    return PlayerResponse(
        id=player.id,
        username=player.username,
        coins=player.coins,
        created_at=_ensure_utc(player.created_at),
    )


async def get_player(db: AsyncSession, player_id: UUID) -> PlayerResponse:
    player = await db.get(Player, player_id, populate_existing=True)
    if player is None:
        raise NotFound(f"Player {player_id} not found")
    return _to_schema(player)


async def get_player_by_username(db: AsyncSession, username: str) -> Player | None:
    result = await db.execute(select(Player).where(Player.username == username))
    return result.scalar_one_or_none()


async def ensure_player_setup(db: AsyncSession, player_id: UUID) -> None:
    """Give a player floor 1 with its plots and a gacha profile if missing.

    Idempotent; caller owns the transaction.
    """
    floor_count = await db.scalar(select(func.count(Floor.id)).where(Floor.player_id == player_id))
    if not floor_count:
        await floor.create_floor(db, player_id, 1)
    await gacha.ensure_profile(db, player_id)


async def login(db: AsyncSession, username: str) -> AuthResponse:
    """Log in by username, registering the player on first login."""
    token = generate_session_token()
    expires_at = datetime.now(UTC) + timedelta(days=settings.session_expire_days)

    async with transaction(db):
        player = await get_player_by_username(db, username)
        created = player is None
        if created:
            player = Player(username=username, coins=settings.starting_coins)
            db.add(player)
            await db.flush()

        await ensure_player_setup(db, player.id)
        db.add(Session(player_id=player.id, token=token, expires_at=expires_at))
        await action_log.record_action(db, player.id, "login", {"created": created})

    await db.refresh(player)
    return AuthResponse(
        player=_to_schema(player),
        session=SessionResponse(token=token, expires_at=expires_at),
        created=created,
    )


async def get_session_player_id(db: AsyncSession, token: str) -> UUID | None:
    """Player id for a live (unexpired) session token."""
    result = await db.execute(
        select(Session.player_id)
        .where(Session.token == token)
        .where(Session.expires_at > datetime.now(UTC))
    )
    return result.scalar_one_or_none()


async def logout(db: AsyncSession, token: str) -> bool:
    """Delete a session. Returns False if the token was unknown."""
    async with transaction(db):
        result = await db.execute(delete(Session).where(Session.token == token))
    return result.rowcount > 0
