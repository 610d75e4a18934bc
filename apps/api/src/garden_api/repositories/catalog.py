"""Seed price catalog repository."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.game.class_weights import get_class_weights
from garden_api.game.economy import standard_base_price
from garden_api.models import SeedCatalogEntry
from garden_shared import BASIC_CLASSES


async def get_catalog_price(db: AsyncSession, seed_class: str) -> int | None:
    result = await db.execute(
        select(SeedCatalogEntry.base_price).where(SeedCatalogEntry.seed_class == seed_class)
    )
    return result.scalar_one_or_none()


async def get_catalog_prices(db: AsyncSession) -> dict[str, int]:
    result = await db.execute(select(SeedCatalogEntry.seed_class, SeedCatalogEntry.base_price))
    return {row.seed_class: row.base_price for row in result}


async def base_price_for(db: AsyncSession, seed_class: str) -> int:
    """Standard base price of a class (basic classes ignore the catalog)."""
    if seed_class in BASIC_CLASSES:
        return standard_base_price(seed_class, None)
    return standard_base_price(seed_class, await get_catalog_price(db, seed_class))


async def set_catalog_price(db: AsyncSession, seed_class: str, base_price: int) -> None:
    """Record the latest price for a class (insert or overwrite)."""
    await db.merge(SeedCatalogEntry(seed_class=seed_class, base_price=base_price))


async def is_known_class(db: AsyncSession, seed_class: str) -> bool:
    """A class can be bought if it is basic, configured in the weight table, or catalogued."""
    if seed_class in BASIC_CLASSES or seed_class in get_class_weights().classes():
        return True
    return await get_catalog_price(db, seed_class) is not None
