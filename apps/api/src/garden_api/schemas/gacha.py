"""Gacha schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from garden_api.game.gacha import GachaOutcome, RewardType


class RequirementView(BaseModel):
    """Mature seeds needed to pull at a step."""

    step: int
    seed_class: str
    count: int

    model_config = {"from_attributes": True}


class GachaState(BaseModel):
    """Snapshot of a player's gacha progress."""

    total_pulls: int
    pity10: int
    pity90: int
    step: int
    current: RequirementView
    next: list[RequirementView]
    inv_counts: dict[str, int] = Field(
        default_factory=dict, description="Mature seeds held, by class"
    )


class RewardView(BaseModel):
    outcome: GachaOutcome
    type: RewardType
    seed_class: str | None = None
    mutation: str | None = None
    amount: int = Field(..., description="Seed base price, or coins for coin rewards")


class RollResponse(BaseModel):
    pull_index: int
    consumed: RequirementView
    reward: RewardView
    pity10: int
    pity90: int
    step: int
    queue_reset: bool
    coins: int
    gacha: GachaState


class GachaRollRecord(BaseModel):
    """One entry of the append-only roll history."""

    id: UUID
    consumed_class: str
    consumed_count: int
    reward_type: RewardType
    out_class: str | None = None
    out_mutation: str | None = None
    out_base: int
    pull_index: int
    pity10_after: int
    pity90_after: int
    step_after: int
    created_at: datetime

    model_config = {"from_attributes": True}
