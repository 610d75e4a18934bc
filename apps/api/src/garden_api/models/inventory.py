"""Inventory models: seeds and free pots held by a player."""

import uuid

from sqlalchemy import BigInteger, Boolean, Float, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from garden_api.database import Base


class InventorySeed(Base):
    """A seed in a player's inventory. Base price is frozen at acquisition."""

    __tablename__ = "inventory_seeds"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    seed_class: Mapped[str] = mapped_column(String(50), nullable=False)
    base_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    is_mature: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    mutation: Mapped[str | None] = mapped_column(String(20), nullable=True)

    __table_args__ = (
        Index("ix_inventory_seeds_player_id", "player_id"),
        Index("ix_inventory_seeds_player_mature_class", "player_id", "is_mature", "seed_class"),
    )


class InventoryPot(Base):
    """A pot not yet placed on a plot."""

    __tablename__ = "inventory_pots"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    player_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    pot_type: Mapped[str] = mapped_column(String(20), nullable=False)
    speed_mult: Mapped[float] = mapped_column(Float, nullable=False)
    yield_mult: Mapped[float] = mapped_column(Float, nullable=False)

    __table_args__ = (Index("ix_inventory_pots_player_id", "player_id"),)
