"""Visiting endpoints: browse other players and steal from their plots."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import get_db
from garden_api.dependencies import get_current_user
from garden_api.repositories import visit as visit_repo
from garden_api.schemas import FloorDetail, StealRequest, StealResponse, VisitFloor, VisitPlayer

router = APIRouter(prefix="/visit", tags=["visit"])


@router.get("/players", response_model=list[VisitPlayer])
async def list_players(
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> list[VisitPlayer]:
    return await visit_repo.list_players(db)


@router.get("/players/{target_id}/floors", response_model=list[VisitFloor])
async def list_player_floors(
    target_id: UUID,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> list[VisitFloor]:
    return await visit_repo.list_player_floors(db, target_id)


@router.get("/floors/{floor_id}", response_model=FloorDetail)
async def get_floor(
    floor_id: UUID,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> FloorDetail:
    return await visit_repo.get_floor_detail(db, floor_id)


@router.post("/steal", response_model=StealResponse)
async def steal(
    request: StealRequest,
    db: AsyncSession = Depends(get_db),
    player_id: UUID = Depends(get_current_user),
) -> StealResponse:
    """
    Try to steal a mature seed.

    A trapped floor always springs a trap first and fines the thief 5% of
    their coins; the plot is untouched in that case.
    """
    return await visit_repo.steal(db, player_id, request)
