"""SQLAlchemy models for the GardenBred database."""

from garden_api.models.action_log import ActionLog
from garden_api.models.catalog import SeedCatalogEntry
from garden_api.models.floor import Floor, Plot
from garden_api.models.gacha import GachaProfile, GachaRoll
from garden_api.models.inventory import InventoryPot, InventorySeed
from garden_api.models.market import ListingStatus, MarketListing
from garden_api.models.player import Player, Session

__all__ = [
    "ActionLog",
    "Floor",
    "GachaProfile",
    "GachaRoll",
    "InventoryPot",
    "InventorySeed",
    "ListingStatus",
    "MarketListing",
    "Player",
    "Plot",
    "SeedCatalogEntry",
    "Session",
]
