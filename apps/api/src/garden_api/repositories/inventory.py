"""Inventory repository - shop purchases, breeding and selling seeds."""

import random
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.database import transaction
from garden_api.errors import ConcurrencyConflict, InvalidRequest, NotFound, PreconditionFailed
from garden_api.game.class_weights import get_class_weights
from garden_api.game.economy import (
    MAX_PURCHASE_QTY,
    MIN_PURCHASE_QTY,
    POT_TYPES,
    breed_base_price,
    shop_sell_payout,
)
from garden_api.game.mutations import mutation_multiplier, roll_mutation_tier
from garden_api.models import InventoryPot, InventorySeed
from garden_api.repositories import action_log, catalog
from garden_api.repositories import coins as coins_repo
from garden_api.schemas import (
    BreedResponse,
    PotView,
    SeedView,
    SellResponse,
    ShopBuyRequest,
    ShopBuyResponse,
    ShopItemType,
)


async def list_seeds(db: AsyncSession, player_id: UUID) -> list[SeedView]:
    result = await db.execute(
        select(InventorySeed)
        .where(InventorySeed.player_id == player_id)
        .order_by(InventorySeed.is_mature, InventorySeed.seed_class)
        .execution_options(populate_existing=True)
    )
    return [SeedView.model_validate(s) for s in result.scalars().all()]


async def list_pots(db: AsyncSession, player_id: UUID) -> list[PotView]:
    result = await db.execute(
        select(InventoryPot)
        .where(InventoryPot.player_id == player_id)
        .order_by(InventoryPot.pot_type)
    )
    return [PotView.model_validate(p) for p in result.scalars().all()]


async def get_owned_seed(db: AsyncSession, player_id: UUID, seed_id: UUID) -> InventorySeed:
    seed = await db.get(InventorySeed, seed_id, populate_existing=True)
    if seed is None or seed.player_id != player_id:
        raise NotFound(f"Seed {seed_id} not found in inventory")
    return seed


async def consume_seeds(db: AsyncSession, player_id: UUID, seed_ids: list[UUID]) -> None:
    """Delete exactly these mature seeds or fail with a retryable conflict."""
    result = await db.execute(
        delete(InventorySeed)
        .where(
            InventorySeed.id.in_(seed_ids),
            InventorySeed.player_id == player_id,
            InventorySeed.is_mature.is_(True),
        )
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != len(seed_ids):
        raise ConcurrencyConflict()


async def add_seed(
    db: AsyncSession,
    player_id: UUID,
    seed_class: str,
    base_price: int,
    is_mature: bool,
    mutation: str | None = None,
) -> InventorySeed:
    seed = InventorySeed(
        player_id=player_id,
        seed_class=seed_class,
        base_price=base_price,
        is_mature=is_mature,
        mutation=mutation,
    )
    db.add(seed)
    await db.flush()
    return seed


async def mature_counts(db: AsyncSession, player_id: UUID) -> dict[str, int]:
    """Mature seeds held, grouped by class."""
    result = await db.execute(
        select(InventorySeed.seed_class, func.count(InventorySeed.id))
        .where(InventorySeed.player_id == player_id, InventorySeed.is_mature.is_(True))
        .group_by(InventorySeed.seed_class)
    )
    return {seed_class: count for seed_class, count in result.all()}


async def shop_buy(db: AsyncSession, player_id: UUID, request: ShopBuyRequest) -> ShopBuyResponse:
    """Buy seeds (immature, priced at the class base price) or pots."""
    qty = request.qty
    if not MIN_PURCHASE_QTY <= qty <= MAX_PURCHASE_QTY:
        raise InvalidRequest(
            f"qty must be between {MIN_PURCHASE_QTY} and {MAX_PURCHASE_QTY}", qty=qty
        )

    async with transaction(db):
        if request.item_type == ShopItemType.SEED:
            seed_class = request.item.lower()
            if not await catalog.is_known_class(db, seed_class):
                raise InvalidRequest(f"Unknown seed class {request.item!r}")
            price_each = await catalog.base_price_for(db, seed_class)
            total = price_each * qty
            coins = await coins_repo.debit_coins(db, player_id, total)
            seeds = [
                await add_seed(db, player_id, seed_class, price_each, is_mature=False)
                for _ in range(qty)
            ]
            pots = []
        else:
            pot_type = POT_TYPES.get(request.item.lower())
            if pot_type is None:
                raise InvalidRequest(f"Invalid pot type {request.item!r}")
            price_each = pot_type.price
            total = price_each * qty
            coins = await coins_repo.debit_coins(db, player_id, total)
            pots = [
                InventoryPot(
                    player_id=player_id,
                    pot_type=pot_type.key,
                    speed_mult=pot_type.speed_mult,
                    yield_mult=pot_type.yield_mult,
                )
                for _ in range(qty)
            ]
            db.add_all(pots)
            await db.flush()
            seeds = []

        await action_log.record_action(
            db,
            player_id,
            f"shop_buy_{request.item_type}",
            {"item": request.item, "qty": qty, "total": total},
        )

    return ShopBuyResponse(
        coins=coins,
        price_each=price_each,
        total=total,
        seeds=[SeedView.model_validate(s) for s in seeds],
        pots=[PotView.model_validate(p) for p in pots],
    )


async def breed(
    db: AsyncSession,
    player_id: UUID,
    seed_a_id: UUID,
    seed_b_id: UUID,
    rng: random.Random | None = None,
) -> BreedResponse:
    """Destroy two mature seeds and produce one immature seed.

    The output class is a weighted draw, its price 80% of the inputs' sum and
    its tier an independent mutation roll. The catalog learns the new price.
    """
    if seed_a_id == seed_b_id:
        raise InvalidRequest("Breeding needs two different seeds")

    async with transaction(db):
        seed_a = await get_owned_seed(db, player_id, seed_a_id)
        seed_b = await get_owned_seed(db, player_id, seed_b_id)
        if not (seed_a.is_mature and seed_b.is_mature):
            raise PreconditionFailed("Seeds must be mature")

        out_class = get_class_weights().pick(rng)
        base_price = breed_base_price(seed_a.base_price, seed_b.base_price)
        mutation = roll_mutation_tier(rng)

        await consume_seeds(db, player_id, [seed_a.id, seed_b.id])
        await catalog.set_catalog_price(db, out_class, base_price)
        seed = await add_seed(db, player_id, out_class, base_price, is_mature=False, mutation=mutation)

        await action_log.record_action(
            db,
            player_id,
            "breed",
            {
                "in": [seed_a.seed_class, seed_b.seed_class],
                "out": out_class,
                "base_price": base_price,
                "mutation": mutation,
            },
        )

    return BreedResponse(seed=SeedView.model_validate(seed), multiplier=mutation_multiplier(mutation))


async def sell_to_shop(db: AsyncSession, player_id: UUID, seed_id: UUID) -> SellResponse:
    async with transaction(db):
        seed = await get_owned_seed(db, player_id, seed_id)
        if not seed.is_mature:
            raise PreconditionFailed("Only mature seeds can be sold")

        payout = shop_sell_payout(seed.base_price, seed.mutation)
        await consume_seeds(db, player_id, [seed.id])
        coins = await coins_repo.credit_coins(db, player_id, payout)

        await action_log.record_action(
            db,
            player_id,
            "sell_shop",
            {"seed_class": seed.seed_class, "mutation": seed.mutation, "payout": payout},
        )

    return SellResponse(seed_id=seed_id, payout=payout, coins=coins)
