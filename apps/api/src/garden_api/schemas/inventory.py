"""Inventory and shop schemas."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class SeedView(BaseModel):
    """A seed in a player's inventory."""

    id: UUID
    seed_class: str
    base_price: int
    is_mature: bool
    mutation: str | None = None

    model_config = {"from_attributes": True}


class PotView(BaseModel):
    """A pot not yet placed on a plot."""

    id: UUID
    pot_type: str
    speed_mult: float
    yield_mult: float

    model_config = {"from_attributes": True}


class ShopItemType(StrEnum):
    SEED = "seed"
    POT = "pot"


class ShopBuyRequest(BaseModel):
    """Buy ``qty`` seeds of a class, or pots of a type."""

    item_type: ShopItemType
    item: str = Field(..., min_length=1, max_length=50, description="Seed class or pot type")
    qty: int = 1


class ShopBuyResponse(BaseModel):
    coins: int
    price_each: int
    total: int
    seeds: list[SeedView] = Field(default_factory=list)
    pots: list[PotView] = Field(default_factory=list)


class TrapBuyRequest(BaseModel):
    qty: int = 1


class FloorTraps(BaseModel):
    floor_id: UUID
    idx: int
    trap_count: int


class TrapBuyResponse(BaseModel):
    coins: int
    qty: int
    price_each: int
    total: int
    trap_max: int
    floors: list[FloorTraps]


class BreedRequest(BaseModel):
    seed_a_id: UUID
    seed_b_id: UUID


class BreedResponse(BaseModel):
    seed: SeedView
    multiplier: float


class SellResponse(BaseModel):
    seed_id: UUID
    payout: int
    coins: int
