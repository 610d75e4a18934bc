"""Coin balance repository.

Balances are only changed through conditional UPDATEs so two concurrent
debits can never take a balance below zero.
"""

from uuid import UUID

from sqlalchemy import case, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from garden_api.errors import InsufficientCoins, NotFound
from garden_api.models import Player


async def get_coins(db: AsyncSession, player_id: UUID) -> int:
    """Current balance read from the database (never from the identity map)."""
    result = await db.execute(select(Player.coins).where(Player.id == player_id))
    coins = result.scalar_one_or_none()
    if coins is None:
        raise NotFound(f"Player {player_id} not found")
    return coins


async def debit_coins(db: AsyncSession, player_id: UUID, amount: int) -> int:
    """Take ``amount`` coins if the balance covers it. Returns the new balance.

    Raises InsufficientCoins (with need/have) otherwise.
    """
    if amount <= 0:
        return await get_coins(db, player_id)

    result = await db.execute(
        update(Player)
        .where(Player.id == player_id, Player.coins >= amount)
        .values(coins=Player.coins - amount)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        have = await get_coins(db, player_id)
        raise InsufficientCoins("Not enough coins", need=amount, have=have)
    return await get_coins(db, player_id)


async def credit_coins(db: AsyncSession, player_id: UUID, amount: int) -> int:
    """Add coins. Returns the new balance."""
    if amount > 0:
        await db.execute(
            update(Player)
            .where(Player.id == player_id)
            .values(coins=Player.coins + amount)
            .execution_options(synchronize_session=False)
        )
    return await get_coins(db, player_id)


async def apply_penalty(db: AsyncSession, player_id: UUID, penalty: int) -> int:
    """Subtract a penalty, clamping the balance at zero. Returns the new balance."""
    await db.execute(
        update(Player)
        .where(Player.id == player_id)
        .values(coins=case((Player.coins >= penalty, Player.coins - penalty), else_=0))
        .execution_options(synchronize_session=False)
    )
    return await get_coins(db, player_id)
