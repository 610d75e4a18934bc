"""Pydantic schemas for API request/response models."""

from garden_api.schemas.gacha import (
    GachaRollRecord,
    GachaState,
    RequirementView,
    RewardView,
    RollResponse,
)
from garden_api.schemas.inventory import (
    BreedRequest,
    BreedResponse,
    FloorTraps,
    PotView,
    SeedView,
    SellResponse,
    ShopBuyRequest,
    ShopBuyResponse,
    ShopItemType,
    TrapBuyRequest,
    TrapBuyResponse,
)
from garden_api.schemas.market import (
    ListingCancelResponse,
    ListingCreate,
    ListingPurchaseResponse,
    ListingView,
)
from garden_api.schemas.player import (
    AuthResponse,
    LoginRequest,
    PlayerResponse,
    SessionResponse,
)
from garden_api.schemas.plot import (
    FloorPurchaseResponse,
    FloorView,
    HarvestAllResponse,
    HarvestResponse,
    LockRequest,
    PlacePotRequest,
    PlantRequest,
    PlotAddress,
    PlotView,
)
from garden_api.schemas.state import PlayerState
from garden_api.schemas.visit import (
    FloorDetail,
    StealOutcome,
    StealRequest,
    StealResponse,
    VisitFloor,
    VisitPlayer,
)

__all__ = [
    # Player
    "AuthResponse",
    "LoginRequest",
    "PlayerResponse",
    "SessionResponse",
    # Inventory / shop
    "BreedRequest",
    "BreedResponse",
    "FloorTraps",
    "PotView",
    "SeedView",
    "SellResponse",
    "ShopBuyRequest",
    "ShopBuyResponse",
    "ShopItemType",
    "TrapBuyRequest",
    "TrapBuyResponse",
    # Floors / plots
    "FloorPurchaseResponse",
    "FloorView",
    "HarvestAllResponse",
    "HarvestResponse",
    "LockRequest",
    "PlacePotRequest",
    "PlantRequest",
    "PlotAddress",
    "PlotView",
    # Market
    "ListingCancelResponse",
    "ListingCreate",
    "ListingPurchaseResponse",
    "ListingView",
    # Gacha
    "GachaRollRecord",
    "GachaState",
    "RequirementView",
    "RewardView",
    "RollResponse",
    # Visit
    "FloorDetail",
    "StealOutcome",
    "StealRequest",
    "StealResponse",
    "VisitFloor",
    "VisitPlayer",
    # State
    "PlayerState",
]
