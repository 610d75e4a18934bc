"""Tests for breeding and selling seeds."""

import pytest
from garden_api.config import settings
from garden_api.game.class_weights import ClassWeightTable, set_class_weights
from garden_api.game.mutations import mutation_multiplier


def headers(player_id):
    return {"X-User-Id": str(player_id)}


class TestBreed:
    """Tests for breeding two mature seeds."""

    @pytest.mark.asyncio
    async def test_breed_consumes_parents(self, client, alice, give_seed):
        a = await give_seed(alice, "fire", base_price=100)
        b = await give_seed(alice, "water", base_price=150)
        response = await client.post(
            "/seeds/breed",
            json={"seed_a_id": str(a), "seed_b_id": str(b)},
            headers=headers(alice),
        )
        assert response.status_code == 200
        data = response.json()
        seed = data["seed"]
        assert seed["is_mature"] is False
        assert seed["base_price"] == 200
        assert seed["seed_class"] in {"fire", "water", "wind", "earth"}
        assert data["multiplier"] == mutation_multiplier(seed["mutation"])

        seeds = (await client.get("/seeds", headers=headers(alice))).json()
        assert [s["id"] for s in seeds] == [seed["id"]]

    @pytest.mark.asyncio
    async def test_breed_output_is_bred_class_from_table(self, client, alice, give_seed, tmp_path):
        path = tmp_path / "weights.json"
        path.write_text('{"lightning": 1}', encoding="utf-8")
        set_class_weights(ClassWeightTable(path))

        a = await give_seed(alice, "fire")
        b = await give_seed(alice, "earth")
        seed = (
            await client.post(
                "/seeds/breed",
                json={"seed_a_id": str(a), "seed_b_id": str(b)},
                headers=headers(alice),
            )
        ).json()["seed"]
        assert seed["seed_class"] == "lightning"

        # The catalog now prices lightning at the bred value
        response = await client.post(
            "/shop/buy", json={"item_type": "seed", "item": "lightning"}, headers=headers(alice)
        )
        assert response.json()["price_each"] == 160

    @pytest.mark.asyncio
    async def test_immature_parent_rejected(self, client, alice, give_seed):
        a = await give_seed(alice, "fire")
        b = await give_seed(alice, "water", is_mature=False)
        response = await client.post(
            "/seeds/breed",
            json={"seed_a_id": str(a), "seed_b_id": str(b)},
            headers=headers(alice),
        )
        assert response.status_code == 400
        assert len((await client.get("/seeds", headers=headers(alice))).json()) == 2

    @pytest.mark.asyncio
    async def test_same_seed_twice_rejected(self, client, alice, give_seed):
        a = await give_seed(alice, "fire")
        response = await client.post(
            "/seeds/breed",
            json={"seed_a_id": str(a), "seed_b_id": str(a)},
            headers=headers(alice),
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_other_players_seed_not_found(self, client, alice, bob, give_seed):
        a = await give_seed(alice, "fire")
        b = await give_seed(bob, "fire")
        response = await client.post(
            "/seeds/breed",
            json={"seed_a_id": str(a), "seed_b_id": str(b)},
            headers=headers(alice),
        )
        assert response.status_code == 404


class TestSell:
    """Tests for selling to the shop."""

    @pytest.mark.asyncio
    async def test_sell_pays_110_percent_of_value(self, client, alice, give_seed):
        seed_id = await give_seed(alice, "fire", base_price=100, mutation="blue")
        response = await client.post(f"/seeds/{seed_id}/sell", headers=headers(alice))
        assert response.status_code == 200
        data = response.json()
        assert data["payout"] == 165
        assert data["coins"] == settings.starting_coins + 165

    @pytest.mark.asyncio
    async def test_immature_seed_not_sellable(self, client, alice, give_seed):
        seed_id = await give_seed(alice, is_mature=False)
        response = await client.post(f"/seeds/{seed_id}/sell", headers=headers(alice))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_sold_seed_is_gone(self, client, alice, give_seed):
        seed_id = await give_seed(alice)
        await client.post(f"/seeds/{seed_id}/sell", headers=headers(alice))
        response = await client.post(f"/seeds/{seed_id}/sell", headers=headers(alice))
        assert response.status_code == 404
