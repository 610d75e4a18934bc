"""Player and auth schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Login request. Unknown usernames are registered on the spot."""

    username: str = Field(..., min_length=2, max_length=32)

    model_config = {"str_strip_whitespace": True}


class PlayerResponse(BaseModel):
    """Player response schema."""

    id: UUID
    username: str
    coins: int
    created_at: datetime

    model_config = {"from_attributes": True}


class SessionResponse(BaseModel):
    """Session response schema."""

    token: str
    expires_at: datetime


class AuthResponse(BaseModel):
    """Authentication response with player and session."""

    player: PlayerResponse
    session: SessionResponse
    created: bool = False
