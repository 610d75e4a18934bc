"""API routes for GardenBred."""

from garden_api.routes.floors import router as floors_router
from garden_api.routes.gacha import router as gacha_router
from garden_api.routes.market import router as market_router
from garden_api.routes.plots import router as plots_router
from garden_api.routes.seeds import router as seeds_router
from garden_api.routes.shop import router as shop_router
from garden_api.routes.state import router as state_router
from garden_api.routes.visit import router as visit_router

__all__ = [
    "floors_router",
    "gacha_router",
    "market_router",
    "plots_router",
    "seeds_router",
    "shop_router",
    "state_router",
    "visit_router",
]
