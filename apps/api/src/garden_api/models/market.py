"""Market listing model."""

import uuid
from datetime import UTC, datetime
from enum import StrEnum

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from garden_api.database import Base


class ListingStatus(StrEnum):
    """Market listing status values."""

    OPEN = "open"
    SOLD = "sold"
    CANCELLED = "cancelled"


class MarketListing(Base):
    """A mature seed held in escrow while offered for sale. Never deleted."""

    __tablename__ = "market_listings"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    seller_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    )
    buyer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("players.id", ondelete="SET NULL"), nullable=True
    )
    seed_class: Mapped[str] = mapped_column(String(50), nullable=False)
    base_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    mutation: Mapped[str | None] = mapped_column(String(20), nullable=True)
    ask_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ListingStatus.OPEN.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_market_listings_status_created", "status", "created_at"),
        Index("ix_market_listings_seller_id", "seller_id"),
    )
