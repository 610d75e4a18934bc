"""Tests for shop purchases."""

import pytest
from garden_api.config import settings


def headers(player_id):
    return {"X-User-Id": str(player_id)}


class TestShopSeeds:
    """Tests for buying seeds."""

    @pytest.mark.asyncio
    async def test_buy_basic_seeds(self, client, alice):
        response = await client.post(
            "/shop/buy",
            json={"item_type": "seed", "item": "Fire", "qty": 3},
            headers=headers(alice),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["price_each"] == 100
        assert data["total"] == 300
        assert data["coins"] == settings.starting_coins - 300
        assert len(data["seeds"]) == 3
        assert all(s["seed_class"] == "fire" and not s["is_mature"] for s in data["seeds"])

    @pytest.mark.asyncio
    async def test_unknown_class_rejected(self, client, alice):
        response = await client.post(
            "/shop/buy", json={"item_type": "seed", "item": "plasma"}, headers=headers(alice)
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "INVALID_REQUEST"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("qty", [0, 51])
    async def test_quantity_bounds(self, client, alice, qty):
        response = await client.post(
            "/shop/buy",
            json={"item_type": "seed", "item": "fire", "qty": qty},
            headers=headers(alice),
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_not_enough_coins(self, client, alice, set_coins):
        await set_coins(alice, 150)
        response = await client.post(
            "/shop/buy",
            json={"item_type": "seed", "item": "fire", "qty": 2},
            headers=headers(alice),
        )
        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "NOT_ENOUGH_COINS"
        assert (data["need"], data["have"]) == (200, 150)

        seeds = (await client.get("/seeds", headers=headers(alice))).json()
        assert seeds == []


class TestShopPots:
    """Tests for buying pots."""

    @pytest.mark.asyncio
    async def test_buy_timeskip_pot(self, client, alice):
        response = await client.post(
            "/shop/buy",
            json={"item_type": "pot", "item": "timeskip", "qty": 2},
            headers=headers(alice),
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 600
        assert [p["speed_mult"] for p in data["pots"]] == [0.67, 0.67]

    @pytest.mark.asyncio
    async def test_unknown_pot_rejected(self, client, alice):
        response = await client.post(
            "/shop/buy", json={"item_type": "pot", "item": "diamond"}, headers=headers(alice)
        )
        assert response.status_code == 400
