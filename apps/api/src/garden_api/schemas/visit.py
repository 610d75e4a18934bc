"""Visiting and stealing schemas."""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from garden_api.schemas.inventory import SeedView
from garden_api.schemas.plot import PlotView


class VisitPlayer(BaseModel):
    id: UUID
    username: str

    model_config = {"from_attributes": True}


class VisitFloor(BaseModel):
    id: UUID
    idx: int
    trap_count: int

    model_config = {"from_attributes": True}


class FloorDetail(BaseModel):
    """Another player's floor as seen by a visitor."""

    id: UUID
    idx: int
    trap_count: int
    player_id: UUID
    owner_username: str
    plots: list[PlotView]


class StealRequest(BaseModel):
    target_player_id: UUID
    floor_id: UUID
    plot_id: UUID


class StealOutcome(StrEnum):
    TRAPPED = "trapped"
    STOLEN = "stolen"
    FAILED = "failed"


class StealResponse(BaseModel):
    """Result of a steal attempt. ``trapped`` and ``failed`` are not errors."""

    ok: bool
    outcome: StealOutcome
    reason: str | None = None
    penalty: int = 0
    coins: int
    seed: SeedView | None = Field(default=None, description="The stolen seed on success")
