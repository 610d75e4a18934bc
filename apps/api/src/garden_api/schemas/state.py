"""Full player view pushed to clients."""

from pydantic import BaseModel

from garden_api.schemas.gacha import GachaState
from garden_api.schemas.inventory import PotView, SeedView
from garden_api.schemas.market import ListingView
from garden_api.schemas.player import PlayerResponse
from garden_api.schemas.plot import FloorView


class PlayerState(BaseModel):
    player: PlayerResponse
    floors: list[FloorView]
    pots: list[PotView]
    seeds: list[SeedView]
    market: list[ListingView]
    trap_price: int
    trap_max: int
    gacha: GachaState
