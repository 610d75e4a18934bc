"""Tests for authentication endpoints."""

from uuid import uuid4

import pytest
from garden_api.config import settings
from garden_api.repositories.player import generate_session_token


class TestSessionToken:
    """Tests for session token generation."""

    def test_generate_session_token_length(self):
        """Session token should be 64 characters (32 bytes hex)."""
        token = generate_session_token()
        assert len(token) == 64

    def test_generate_session_token_unique(self):
        """Each token should be unique."""
        tokens = [generate_session_token() for _ in range(100)]
        assert len(set(tokens)) == 100

    def test_generate_session_token_hex(self):
        """Token should be valid hexadecimal."""
        token = generate_session_token()
        int(token, 16)  # Should not raise


class TestLogin:
    """Integration tests for login and the starter setup."""

    @pytest.mark.asyncio
    async def test_first_login_registers_player(self, client):
        """A new username gets starting coins, floor 1 and a session."""
        response = await client.post("/auth/login", json={"username": "alice"})
        assert response.status_code == 200
        data = response.json()
        assert data["created"] is True
        assert data["player"]["username"] == "alice"
        assert data["player"]["coins"] == settings.starting_coins
        assert len(data["session"]["token"]) == 64

        headers = {"X-User-Id": data["player"]["id"]}
        floors = (await client.get("/floors", headers=headers)).json()
        assert [f["idx"] for f in floors] == [1]
        assert len(floors[0]["plots"]) == 10
        assert all(p["stage"] == "empty" for p in floors[0]["plots"])

    @pytest.mark.asyncio
    async def test_second_login_reuses_player(self, client):
        """Logging in again returns the same player with a new session."""
        first = (await client.post("/auth/login", json={"username": "alice"})).json()
        second = (await client.post("/auth/login", json={"username": "alice"})).json()

        assert second["created"] is False
        assert second["player"]["id"] == first["player"]["id"]
        assert second["session"]["token"] != first["session"]["token"]

        headers = {"X-User-Id": first["player"]["id"]}
        floors = (await client.get("/floors", headers=headers)).json()
        assert len(floors) == 1

    @pytest.mark.asyncio
    async def test_username_too_short(self, client):
        response = await client.post("/auth/login", json={"username": "a"})
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_me_returns_player(self, client, alice):
        response = await client.get("/auth/me", headers={"X-User-Id": str(alice)})
        assert response.status_code == 200
        assert response.json()["username"] == "alice"

    @pytest.mark.asyncio
    async def test_me_unknown_player(self, client):
        response = await client.get("/auth/me", headers={"X-User-Id": str(uuid4())})
        assert response.status_code == 404
        assert response.json()["error_type"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_invalid_user_id_header(self, client):
        response = await client.get("/auth/me", headers={"X-User-Id": "not-a-uuid"})
        assert response.status_code == 400


class TestLogout:
    """Tests for the logout endpoint."""

    @pytest.mark.asyncio
    async def test_logout_requires_bearer(self, client):
        response = await client.post("/auth/logout")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_logout_deletes_session(self, client):
        data = (await client.post("/auth/login", json={"username": "alice"})).json()
        headers = {"Authorization": f"Bearer {data['session']['token']}"}

        response = await client.post("/auth/logout", headers=headers)
        assert response.status_code == 204

        response = await client.post("/auth/logout", headers=headers)
        assert response.status_code == 401


class TestProductionAuth:
    """Bearer-token identity when AUTH_MODE=production."""

    @pytest.fixture(autouse=True)
    def production_mode(self, monkeypatch):
        monkeypatch.setattr(settings, "auth_mode", "production")

    @pytest.mark.asyncio
    async def test_missing_header_rejected(self, client):
        response = await client.get("/auth/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_token_rejected(self, client):
        response = await client.get("/auth/me", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_session_token_accepted(self, client):
        data = (await client.post("/auth/login", json={"username": "alice"})).json()
        response = await client.get(
            "/auth/me", headers={"Authorization": f"Bearer {data['session']['token']}"}
        )
        assert response.status_code == 200
        assert response.json()["id"] == data["player"]["id"]
