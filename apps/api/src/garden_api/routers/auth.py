"""Authentication router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import player as player_repo
from garden_api.schemas import AuthResponse, LoginRequest, PlayerResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """
    Login with a username.

    A new username is registered with the starting coins, floor 1 and a
    gacha profile.
    """
    return await player_repo.login(db, credentials.username)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    authorization: Annotated[str | None, Header()] = None,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Logout and invalidate the current session."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
        )

    if not await player_repo.logout(db, authorization[7:]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session token",
        )


@router.get("/me", response_model=PlayerResponse)
async def get_me(
    player_id: Annotated[UUID, Depends(get_current_user)],
    db: AsyncSession = Depends(get_db),
) -> PlayerResponse:
    """Get the current authenticated player."""
    player = await player_repo.get_player(db, player_id)
    return player
