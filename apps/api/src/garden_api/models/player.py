"""Player and Session models."""

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_api.database import Base

if TYPE_CHECKING:
    from garden_api.models.floor import Floor
    from garden_api.models.gacha import GachaProfile


class Player(Base):
    """A player account. Created on first login, never deleted in game."""

    __tablename__ = "players"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    coins: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
    )

    sessions: Mapped[list["Session"]] = relationship(
        "Session", back_populates="player", cascade="all, delete-orphan", passive_deletes=True
    )
    floors: Mapped[list["Floor"]] = relationship(
        "Floor", back_populates="player", cascade="all, delete-orphan", passive_deletes=True
    )
    gacha_profile: Mapped["GachaProfile | None"] = relationship(
        "GachaProfile",
        back_populates="player",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_players_username", "username"),)


class Session(Base):
    """Login session for a player."""

    __tablename__ = "sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
    )

    player: Mapped["Player"] = relationship("Player", back_populates="sessions")

    __table_args__ = (
        Index("ix_sessions_token", "token"),
        Index("ix_sessions_player_id", "player_id"),
        Index("ix_sessions_expires_at", "expires_at"),
    )
