"""Floor and plot schemas."""

from uuid import UUID

from pydantic import BaseModel, Field

from garden_api.game.economy import PLOTS_PER_FLOOR
from garden_api.schemas.inventory import SeedView
from garden_shared import PlotStage


class PlotView(BaseModel):
    """A plot with its pot and (optional) occupant."""

    id: UUID
    floor_id: UUID
    slot: int
    pot_id: UUID | None = None
    pot_type: str | None = None
    pot_speed_mult: float | None = None
    pot_yield_mult: float | None = None
    seed_class: str | None = None
    mutation: str | None = None
    base_price: int | None = None
    stage: PlotStage
    planted_at: int | None = Field(default=None, description="Epoch milliseconds")
    mature_at: int | None = Field(default=None, description="Epoch milliseconds")
    locked: bool = False

    model_config = {"from_attributes": True}


class FloorView(BaseModel):
    """A floor with its plots in slot order."""

    id: UUID
    player_id: UUID
    idx: int
    unlocked: bool
    trap_count: int
    plots: list[PlotView] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class PlotAddress(BaseModel):
    """A plot addressed by floor and slot."""

    floor_id: UUID
    slot: int = Field(..., ge=1, le=PLOTS_PER_FLOOR)


class PlacePotRequest(PlotAddress):
    pot_id: UUID


class PlantRequest(PlotAddress):
    seed_id: UUID
    mutation: str | None = Field(
        default=None, description="Mutation tier override; defaults to the seed's own tier"
    )


class LockRequest(BaseModel):
    locked: bool


class HarvestResponse(BaseModel):
    plot: PlotView
    seed: SeedView


class HarvestAllResponse(BaseModel):
    harvested: int
    seeds: list[SeedView] = Field(default_factory=list)


class FloorPurchaseResponse(BaseModel):
    floor: FloorView
    price: int
    coins: int
