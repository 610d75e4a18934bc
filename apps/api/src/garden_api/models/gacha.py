"""Gacha profile and roll history models."""

import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_api.database import Base, JSONVariant

if TYPE_CHECKING:
    from garden_api.models.player import Player


class GachaProfile(Base):
    """Per-player gacha state: counters, step cursor and requirement queue.

    ``version`` is bumped on every update; a write based on a stale read
    fails at flush time instead of silently overwriting another roll.
    """

    __tablename__ = "gacha_profiles"

    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="CASCADE"), primary_key=True
    )
    total_pulls: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pity10: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pity90: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    step: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    queue: Mapped[list[str]] = mapped_column(JSONVariant, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    player: Mapped["Player"] = relationship("Player", back_populates="gacha_profile")

    __mapper_args__ = {"version_id_col": version}


class GachaRoll(Base):
    """Append-only record of one gacha roll."""

    __tablename__ = "gacha_rolls"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    consumed_class: Mapped[str] = mapped_column(String(50), nullable=False)
    consumed_count: Mapped[int] = mapped_column(Integer, nullable=False)
    reward_type: Mapped[str] = mapped_column(String(20), nullable=False)
    out_class: Mapped[str | None] = mapped_column(String(50), nullable=True)
    out_mutation: Mapped[str | None] = mapped_column(String(20), nullable=True)
    # Seed base price, or the coin amount for coin rewards
    out_base: Mapped[int] = mapped_column(BigInteger, nullable=False)
    pull_index: Mapped[int] = mapped_column(Integer, nullable=False)
    pity10_after: Mapped[int] = mapped_column(Integer, nullable=False)
    pity90_after: Mapped[int] = mapped_column(Integer, nullable=False)
    step_after: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_gacha_rolls_player_pull", "player_id", "pull_index"),
    )
