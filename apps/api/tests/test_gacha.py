"""Tests for the gacha endpoints."""

import pytest
from garden_api.config import settings
from garden_api.game import gacha as gacha_rules
from garden_api.game.class_weights import ClassWeightTable, set_class_weights
from garden_api.game.gacha import GachaOutcome
from garden_api.repositories import gacha as gacha_repo


def headers(player_id):
    return {"X-User-Id": str(player_id)}


@pytest.fixture(autouse=True)
def fire_only(basic_class_weights, tmp_path):
    """Every queue entry and drawn class is fire."""
    path = tmp_path / "fire_only.json"
    path.write_text('{"fire": 1}', encoding="utf-8")
    set_class_weights(ClassWeightTable(path))


@pytest.fixture
def force_outcome(monkeypatch):
    """Pin the reward-type draw, with pity off so no tier is rolled."""

    def _force(outcome: GachaOutcome):
        monkeypatch.setattr(gacha_rules, "pick_outcome", lambda rng=None: outcome)
        monkeypatch.setattr(settings, "gacha_pity_enabled", False)

    return _force


class TestGachaState:
    """Tests for the state endpoint."""

    @pytest.mark.asyncio
    async def test_initial_state(self, client, alice, give_seed):
        await give_seed(alice, "fire")
        await give_seed(alice, "fire")
        await give_seed(alice, "water", is_mature=False)

        response = await client.get("/gacha", headers=headers(alice))
        assert response.status_code == 200
        data = response.json()
        assert (data["total_pulls"], data["pity10"], data["pity90"], data["step"]) == (0, 0, 0, 0)
        assert data["current"] == {"step": 0, "seed_class": "fire", "count": 1}
        assert len(data["next"]) == settings.gacha_preview_size
        assert [r["count"] for r in data["next"][:3]] == [3, 5, 7]
        assert data["inv_counts"] == {"fire": 2}


class TestRoll:
    """Tests for rolling."""

    @pytest.mark.asyncio
    async def test_not_enough_materials(self, client, alice):
        response = await client.post("/gacha/roll", headers=headers(alice))
        assert response.status_code == 400
        data = response.json()
        assert data["error_type"] == "NOT_ENOUGH_MATERIALS"
        assert data["need"] == {"seed_class": "fire", "count": 1}
        assert data["have"] == 0

        state = (await client.get("/gacha", headers=headers(alice))).json()
        assert state["total_pulls"] == 0

    @pytest.mark.asyncio
    async def test_first_roll_consumes_one_seed(self, client, alice, give_seed):
        seed_id = await give_seed(alice, "fire")

        response = await client.post("/gacha/roll", headers=headers(alice))
        assert response.status_code == 200
        data = response.json()
        assert data["pull_index"] == 1
        assert data["consumed"] == {"step": 0, "seed_class": "fire", "count": 1}
        assert data["step"] == (0 if data["queue_reset"] else 1)
        assert data["gacha"]["total_pulls"] == 1

        seeds = (await client.get("/seeds", headers=headers(alice))).json()
        assert str(seed_id) not in {s["id"] for s in seeds}

    @pytest.mark.asyncio
    async def test_second_step_costs_three(self, client, alice, give_seed, force_outcome):
        force_outcome(GachaOutcome.SEED_PLANTED)
        await give_seed(alice, "fire")
        first = (await client.post("/gacha/roll", headers=headers(alice))).json()
        assert first["step"] == 1
        assert first["reward"]["type"] == "seed_planted"
        assert first["reward"]["amount"] == 100

        response = await client.post("/gacha/roll", headers=headers(alice))
        assert response.status_code == 400
        assert response.json()["need"] == {"seed_class": "fire", "count": 3}

        for _ in range(3):
            await give_seed(alice, "fire")
        second = (await client.post("/gacha/roll", headers=headers(alice))).json()
        assert second["pull_index"] == 2
        assert second["consumed"]["count"] == 3
        assert second["step"] == 2
        assert second["gacha"]["current"]["count"] == 5

    @pytest.mark.asyncio
    async def test_cheapest_seeds_consumed(self, client, alice, give_seed, force_outcome):
        force_outcome(GachaOutcome.SEED_PLANTED)
        await give_seed(alice, "fire", base_price=500)
        await give_seed(alice, "fire", base_price=100)

        await client.post("/gacha/roll", headers=headers(alice))

        seeds = (await client.get("/seeds", headers=headers(alice))).json()
        mature = [s for s in seeds if s["is_mature"]]
        assert [s["base_price"] for s in mature] == [500]

    @pytest.mark.asyncio
    async def test_coin_reward(self, client, alice, give_seed, force_outcome):
        force_outcome(GachaOutcome.COINS)
        await give_seed(alice, "fire")

        data = (await client.post("/gacha/roll", headers=headers(alice))).json()
        assert data["reward"]["type"] == "coins"
        assert data["reward"]["seed_class"] is None
        assert data["coins"] == settings.starting_coins + data["reward"]["amount"]

    @pytest.mark.asyncio
    async def test_mature_reward_value(self, client, alice, give_seed, force_outcome):
        force_outcome(GachaOutcome.SEED_MATURE)
        await give_seed(alice, "fire")

        data = (await client.post("/gacha/roll", headers=headers(alice))).json()
        assert data["reward"]["amount"] == 10_000

        seeds = (await client.get("/seeds", headers=headers(alice))).json()
        assert [(s["seed_class"], s["base_price"], s["is_mature"]) for s in seeds] == [
            ("fire", 10_000, True)
        ]

    @pytest.mark.asyncio
    async def test_rainbow_resets_step_and_queue(self, client, alice, give_seed, force_outcome):
        force_outcome(GachaOutcome.SEED_PLANTED)
        await give_seed(alice, "fire")
        await client.post("/gacha/roll", headers=headers(alice))

        force_outcome(GachaOutcome.RAINBOW)
        for _ in range(3):
            await give_seed(alice, "fire")
        data = (await client.post("/gacha/roll", headers=headers(alice))).json()
        assert data["reward"]["mutation"] == "rainbow"
        assert data["reward"]["amount"] == 200_000
        assert data["queue_reset"] is True
        assert (data["step"], data["pity10"], data["pity90"]) == (0, 0, 0)
        assert data["gacha"]["current"] == {"step": 0, "seed_class": "fire", "count": 1}
        assert data["gacha"]["total_pulls"] == 2

    @pytest.mark.asyncio
    async def test_inventory_change_is_retryable_conflict(
        self, client, alice, give_seed, monkeypatch
    ):
        await give_seed(alice, "fire")

        async def vanished(db, player_id, seed_class, count):
            return []

        monkeypatch.setattr(gacha_repo, "_pick_mature_seed_ids", vanished)

        response = await client.post("/gacha/roll", headers=headers(alice))
        assert response.status_code == 409
        data = response.json()
        assert data["error_type"] == "INV_CHANGED_RETRY"
        assert data["retryable"] is True

        state = (await client.get("/gacha", headers=headers(alice))).json()
        assert state["total_pulls"] == 0
        assert state["inv_counts"] == {"fire": 1}

    @pytest.mark.asyncio
    async def test_immature_seed_is_never_consumed(
        self, client, alice, give_seed, monkeypatch
    ):
        await give_seed(alice, "fire")
        sprout = await give_seed(alice, "fire", is_mature=False)

        async def pick_sprout(db, player_id, seed_class, count):
            return [sprout]

        monkeypatch.setattr(gacha_repo, "_pick_mature_seed_ids", pick_sprout)

        response = await client.post("/gacha/roll", headers=headers(alice))
        assert response.status_code == 409
        assert response.json()["error_type"] == "INV_CHANGED_RETRY"

        seeds = (await client.get("/seeds", headers=headers(alice))).json()
        assert str(sprout) in {s["id"] for s in seeds}
        assert len(seeds) == 2


class TestHistory:
    """Tests for roll history."""

    @pytest.mark.asyncio
    async def test_history_newest_first(self, client, alice, give_seed, force_outcome):
        force_outcome(GachaOutcome.COINS)
        await give_seed(alice, "fire")
        await client.post("/gacha/roll", headers=headers(alice))
        for _ in range(3):
            await give_seed(alice, "fire")
        await client.post("/gacha/roll", headers=headers(alice))

        response = await client.get("/gacha/history", headers=headers(alice))
        assert response.status_code == 200
        records = response.json()
        assert [r["pull_index"] for r in records] == [2, 1]
        assert records[0]["consumed_count"] == 3
        assert records[1]["reward_type"] == "coins"
        assert records[1]["out_class"] is None
        assert records[1]["step_after"] == 1

    @pytest.mark.asyncio
    async def test_history_limit(self, client, alice):
        response = await client.get("/gacha/history?limit=0", headers=headers(alice))
        assert response.status_code == 422
