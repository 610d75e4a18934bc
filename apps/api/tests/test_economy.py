"""Tests for prices, payouts and limits."""

import pytest
from garden_api.game.economy import (
    POT_TYPES,
    breed_base_price,
    distribute_traps,
    effective_value,
    floor_product,
    floor_purchase_price,
    market_ask_bounds,
    shop_sell_payout,
    standard_base_price,
    trap_max,
    trap_penalty,
    trap_unit_price,
)


class TestFloorProduct:
    """Tests for exact floored multiplication."""

    def test_no_float_drift(self):
        """0.1 * 3 style drift must not push a product below an integer."""
        assert floor_product(100, 1.1) == 110
        assert floor_product(1000, 0.9) == 900

    def test_multiple_factors(self):
        assert floor_product(100, 1.2, 1.1) == 132


class TestPrices:
    """Tests for class and item prices."""

    def test_basic_classes_ignore_catalog(self):
        assert standard_base_price("fire", 999) == 100

    def test_catalog_price_used_for_bred_classes(self):
        assert standard_base_price("lightning", 420) == 420
        assert standard_base_price("lightning", None) == 100

    def test_breed_price_is_eighty_percent_of_sum(self):
        assert breed_base_price(100, 100) == 160
        assert breed_base_price(101, 100) == 160

    def test_pot_types(self):
        assert POT_TYPES["basic"].price == 100
        assert POT_TYPES["gold"].yield_mult == 1.5
        assert POT_TYPES["timeskip"].speed_mult == 0.67

    def test_floor_prices(self):
        assert floor_purchase_price(1) == 0
        assert floor_purchase_price(2) == 2000
        assert floor_purchase_price(5) == 5000


class TestPayouts:
    """Tests for selling and market bounds."""

    def test_shop_sell_payout(self):
        assert shop_sell_payout(100, None) == 110
        assert shop_sell_payout(100, "green") == 132
        assert shop_sell_payout(100, "rainbow") == 1210

    def test_effective_value_never_below_one(self):
        assert effective_value(0, None) == 1
        assert effective_value(100, "blue") == 150

    @pytest.mark.parametrize(
        "base,mutation,bounds",
        [
            (100, None, (90, 150)),
            (100, "gold", (540, 900)),
            (7, None, (6, 10)),
        ],
    )
    def test_market_ask_bounds(self, base, mutation, bounds):
        assert market_ask_bounds(base, mutation) == bounds


class TestTraps:
    """Tests for trap pricing, capacity and penalties."""

    def test_price_and_capacity_scale_with_floors(self):
        assert trap_unit_price(1) == 1000
        assert trap_unit_price(3) == 3000
        assert trap_max(3) == 15

    def test_penalty_is_five_percent_at_least_one(self):
        assert trap_penalty(10000) == 500
        assert trap_penalty(39) == 1
        assert trap_penalty(0) == 1

    def test_distribute_fills_floors_in_order(self):
        assert distribute_traps([5, 5, 5], 7) == [5, 2, 0]
        assert distribute_traps([1, 5], 3) == [1, 2]
        assert distribute_traps([0, 0, 4], 4) == [0, 0, 4]
