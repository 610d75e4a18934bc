"""Prices, payouts and limits.

All fractional price arithmetic is done in Decimal and floored once, so
results match the integer formulas exactly (no float drift at boundaries).
"""

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal

from garden_api.game.mutations import mutation_multiplier
from garden_shared import BASIC_CLASSES

DEFAULT_BASE_PRICE = 100

PLOTS_PER_FLOOR = 10
TRAPS_PER_FLOOR = 5
FLOOR_PRICE_STEP = 1000
TRAP_PRICE_PER_FLOOR = 1000

MIN_PURCHASE_QTY = 1
MAX_PURCHASE_QTY = 50

BREED_FACTOR = Decimal("0.8")
SHOP_SELL_FACTOR = Decimal("1.1")
MARKET_MIN_FACTOR = Decimal("0.9")
MARKET_MAX_FACTOR = Decimal("1.5")
TRAP_PENALTY_RATE = Decimal("0.05")


@dataclass(frozen=True)
class PotType:
    key: str
    price: int
    speed_mult: float
    yield_mult: float


POT_TYPES: dict[str, PotType] = {
    "basic": PotType("basic", 100, 1.0, 1.0),
    "gold": PotType("gold", 300, 1.0, 1.5),
    "timeskip": PotType("timeskip", 300, 0.67, 1.0),
}


def floor_product(value: int, *factors: float | Decimal) -> int:
    """floor(value * factor1 * factor2 ...) computed exactly."""
    total = Decimal(value)
    for factor in factors:
        total *= factor if isinstance(factor, Decimal) else Decimal(str(factor))
    return int(total.to_integral_value(rounding=ROUND_FLOOR))


def standard_base_price(seed_class: str, catalog_price: int | None) -> int:
    """Base price of a class: 100 for the basic classes, else the catalog price (default 100)."""
    if seed_class in BASIC_CLASSES:
        return DEFAULT_BASE_PRICE
    return catalog_price if catalog_price is not None else DEFAULT_BASE_PRICE


def breed_base_price(price_a: int, price_b: int) -> int:
    return floor_product(price_a + price_b, BREED_FACTOR)


def shop_sell_payout(base_price: int, mutation: str | None) -> int:
    return floor_product(base_price, mutation_multiplier(mutation), SHOP_SELL_FACTOR)


def effective_value(base_price: int, mutation: str | None) -> int:
    """Mutation-adjusted value of a seed, never below 1."""
    return max(1, floor_product(base_price, mutation_multiplier(mutation)))


def market_ask_bounds(base_price: int, mutation: str | None) -> tuple[int, int]:
    """Inclusive [min, max] accepted ask price for a listing."""
    eff = effective_value(base_price, mutation)
    return floor_product(eff, MARKET_MIN_FACTOR), floor_product(eff, MARKET_MAX_FACTOR)


def floor_purchase_price(idx: int) -> int:
    """Floor 1 is free; later floors cost idx * 1000."""
    return 0 if idx <= 1 else idx * FLOOR_PRICE_STEP


def trap_unit_price(floor_count: int) -> int:
    return TRAP_PRICE_PER_FLOOR * floor_count


def trap_max(floor_count: int) -> int:
    return TRAPS_PER_FLOOR * floor_count


def trap_penalty(coins: int) -> int:
    """5% of the attacker's coins, rounded down, at least 1."""
    return max(1, floor_product(coins, TRAP_PENALTY_RATE))


def distribute_traps(free_slots: list[int], qty: int) -> list[int]:
    """Spread ``qty`` traps over floors in order, filling each floor's free slots.

    Returns how many to add per floor (same order as ``free_slots``).
    """
    remaining = qty
    allocation = []
    for room in free_slots:
        add = min(max(0, room), remaining)
        allocation.append(add)
        remaining -= add
    return allocation
