"""Market schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from garden_api.models import ListingStatus
from garden_api.schemas.inventory import SeedView


class ListingView(BaseModel):
    """A market listing. The listed seed is held in escrow until sold or cancelled."""

    id: UUID
    seller_id: UUID
    buyer_id: UUID | None = None
    seed_class: str
    base_price: int
    mutation: str | None = None
    ask_price: int
    status: ListingStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class ListingCreate(BaseModel):
    seed_id: UUID
    ask_price: int = Field(..., ge=0)


class ListingPurchaseResponse(BaseModel):
    listing: ListingView
    seed: SeedView
    coins: int


class ListingCancelResponse(BaseModel):
    listing: ListingView
    seed: SeedView
