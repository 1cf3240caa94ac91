"""Integration tests for the caller's profile endpoints."""

import re

import pytest
from httpx import AsyncClient


class TestMyProfile:
    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/me/profile")

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_valid_token_accepted(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.get("/api/v1/me/profile", headers=auth_headers)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_first_visit_creates_profile(self, authenticated_client: AsyncClient) -> None:
        response = await authenticated_client.get("/api/v1/me/profile")

        assert response.status_code == 200
        data = response.json()["data"]
        assert re.fullmatch(r"janedoe_[a-z0-9]{4}", data["username"])
        assert data["theme"] == "light"

    @pytest.mark.asyncio
    async def test_second_visit_returns_same_profile(
        self, authenticated_client: AsyncClient
    ) -> None:
        first = (await authenticated_client.get("/api/v1/me/profile")).json()["data"]
        second = (await authenticated_client.get("/api/v1/me/profile")).json()["data"]

        assert first["id"] == second["id"]
        assert first["username"] == second["username"]

    @pytest.mark.asyncio
    async def test_update_profile(self, authenticated_client: AsyncClient) -> None:
        await authenticated_client.get("/api/v1/me/profile")

        response = await authenticated_client.patch(
            "/api/v1/me/profile",
            json={"username": "ABC_1", "display_name": "Abc", "theme": "dark"},
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["username"] == "abc_1"
        assert data["display_name"] == "Abc"
        assert data["theme"] == "dark"

    @pytest.mark.asyncio
    async def test_invalid_username(self, authenticated_client: AsyncClient) -> None:
        await authenticated_client.get("/api/v1/me/profile")

        response = await authenticated_client.patch(
            "/api/v1/me/profile", json={"username": "has space"}
        )

        assert response.status_code == 400
        assert response.json()["details"] == [{"field": "username", "reason": "format"}]

    @pytest.mark.asyncio
    async def test_bio_too_long(self, authenticated_client: AsyncClient) -> None:
        await authenticated_client.get("/api/v1/me/profile")

        response = await authenticated_client.patch("/api/v1/me/profile", json={"bio": "x" * 201})

        assert response.status_code == 400
        assert response.json()["details"][0]["reason"] == "too_long"

    @pytest.mark.asyncio
    async def test_update_before_create_is_not_found(
        self, authenticated_client: AsyncClient
    ) -> None:
        response = await authenticated_client.patch("/api/v1/me/profile", json={"bio": "hi"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_no_social_links_yet(self, authenticated_client: AsyncClient) -> None:
        await authenticated_client.get("/api/v1/me/profile")

        response = await authenticated_client.get("/api/v1/me/social-links")

        assert response.status_code == 200
        assert response.json()["data"] == []
