"""Floor and Plot models."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from garden_api.database import Base
from garden_shared import PlotStage

if TYPE_CHECKING:
    from garden_api.models.player import Player


class Floor(Base):
    """A floor of ten plots owned by one player."""

    __tablename__ = "floors"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    idx: Mapped[int] = mapped_column(Integer, nullable=False)
    unlocked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    trap_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    player: Mapped["Player"] = relationship("Player", back_populates="floors")
    plots: Mapped[list["Plot"]] = relationship(
        "Plot",
        back_populates="floor",
        order_by="Plot.slot",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_floors_player_idx", "player_id", "idx", unique=True),
        CheckConstraint("trap_count >= 0 AND trap_count <= 5", name="ck_floors_trap_count"),
    )


class Plot(Base):
    """A farmable slot on a floor.

    Pot fields persist across harvests; seed fields (class, mutation, base
    price and timestamps) are set by planting and cleared by harvest/steal.
    ``planted_at``/``mature_at`` are epoch milliseconds.
    """

    __tablename__ = "plots"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    floor_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("floors.id", ondelete="CASCADE"), nullable=False
    )
    slot: Mapped[int] = mapped_column(Integer, nullable=False)

    pot_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    pot_type: Mapped[str | None] = mapped_column(String(20), nullable=True)
    pot_speed_mult: Mapped[float | None] = mapped_column(Float, nullable=True)
    pot_yield_mult: Mapped[float | None] = mapped_column(Float, nullable=True)

    seed_class: Mapped[str | None] = mapped_column(String(50), nullable=True)
    mutation: Mapped[str | None] = mapped_column(String(20), nullable=True)
    base_price: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    stage: Mapped[str] = mapped_column(String(20), nullable=False, default=PlotStage.EMPTY.value)
    planted_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    mature_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    locked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    floor: Mapped["Floor"] = relationship("Floor", back_populates="plots")

    __table_args__ = (
        Index("ix_plots_floor_slot", "floor_id", "slot", unique=True),
        Index("ix_plots_stage", "stage"),
    )
