"""Plot endpoints: pots, planting, harvesting and locks."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import plot as plot_repo
from garden_api.schemas import (
    HarvestAllResponse,
    HarvestResponse,
    LockRequest,
    PlacePotRequest,
    PlantRequest,
    PlotAddress,
    PlotView,
)

router = APIRouter(prefix="/plots", tags=["plots"])


@router.post("/place-pot", response_model=PlotView)
async def place_pot(
    request: PlacePotRequest,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> PlotView:
    return await plot_repo.place_pot(db, player_id, request)


@router.post("/plant", response_model=PlotView)
async def plant(
    request: PlantRequest,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> PlotView:
    """Plant an immature seed. The response carries the computed ``mature_at``."""
    return await plot_repo.plant(db, player_id, request)


@router.post("/harvest-all", response_model=HarvestAllResponse)
async def harvest_all(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> HarvestAllResponse:
    """Harvest every unlocked mature plot. Locked or unripe plots are skipped."""
    return await plot_repo.harvest_all(db, player_id)


@router.post("/remove", response_model=PlotView)
async def remove(
    request: PlotAddress,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> PlotView:
    return await plot_repo.remove(db, player_id, request)


@router.post("/{plot_id}/harvest", response_model=HarvestResponse)
async def harvest(
    plot_id: UUID,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> HarvestResponse:
    """
    Harvest a mature plot into a mature inventory seed.

    Returns 409 if the plot is locked.
    """
    return await plot_repo.harvest(db, player_id, plot_id)


@router.put("/{plot_id}/lock", response_model=PlotView)
async def set_lock(
    plot_id: UUID,
    request: LockRequest,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> PlotView:
    return await plot_repo.set_lock(db, player_id, plot_id, request.locked)
