"""Full player view for the state endpoint and the live push channel."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.repositories import floor, gacha, inventory, market, player
from garden_api.schemas import PlayerState


async def get_player_state(db: AsyncSession, player_id: UUID) -> PlayerState:
    """Snapshot of everything a client renders: floors, inventory, market and gacha."""
    trap_price, trap_max = await floor.trap_pricing(db, player_id)
    return PlayerState(
        player=await player.get_player(db, player_id),
        floors=await floor.list_floors(db, player_id),
        pots=await inventory.list_pots(db, player_id),
        seeds=await inventory.list_seeds(db, player_id),
        market=await market.list_open(db),
        trap_price=trap_price,
        trap_max=trap_max,
        gacha=await gacha.get_state(db, player_id),
    )
