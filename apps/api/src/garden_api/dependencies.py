"""FastAPI dependencies for the GardenBred API."""

from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.config import settings
from garden_api.database import get_db
from garden_api.repositories import player as player_repo

# Placeholder player ID for development mode
DEV_PLAYER_ID = UUID("00000000-0000-0000-0000-000000000001")


class AuthError(Exception):
    """Identity could not be resolved. ``status_code`` is 400 or 401."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


async def resolve_player_id(
    db: AsyncSession,
    token: str | None = None,
    dev_player_id: str | None = None,
) -> UUID:
    """Map request credentials to a player id.

    In dev mode (AUTH_MODE=dev) the given player id is trusted, falling back
    to DEV_PLAYER_ID. In production mode a live session token is required.
    Shared by HTTP requests and the websocket channel.
    """
    if settings.auth_mode == "dev":
        if dev_player_id:
            try:
                return UUID(dev_player_id)
            except ValueError:
                raise AuthError(status.HTTP_400_BAD_REQUEST, "Invalid user ID format")
        return DEV_PLAYER_ID

    if not token:
        raise AuthError(status.HTTP_401_UNAUTHORIZED, "Missing session token")

    player_id = await player_repo.get_session_player_id(db, token)
    if player_id is None:
        raise AuthError(status.HTTP_401_UNAUTHORIZED, "Invalid or expired session token")
    return player_id


async def get_current_user(
    authorization: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    db: AsyncSession = Depends(get_db),
) -> UUID:
    """
    Get the current authenticated player ID.

    In dev mode (AUTH_MODE=dev):
        - Accepts X-User-Id header for testing
        - Falls back to DEV_PLAYER_ID if no header provided

    In production mode (AUTH_MODE=production):
        - Requires Authorization: Bearer <token> header
        - Validates token against session database
        - Returns 401 if invalid or expired
    """
    token = None
    if settings.auth_mode != "dev":
        if not authorization:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Missing authorization header",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if not authorization.startswith("Bearer "):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid authorization header format",
                headers={"WWW-Authenticate": "Bearer"},
            )
        token = authorization[7:]

    try:
        return await resolve_player_id(db, token=token, dev_player_id=x_user_id)
    except AuthError as exc:
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        raise HTTPException(
            status_code=exc.status_code, detail=exc.detail, headers=headers
        ) from exc
