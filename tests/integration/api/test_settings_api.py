"""Tests for Settings API endpoints."""

import pytest
from httpx import AsyncClient


class TestGetSettings:
    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient) -> None:
        response = await client.get("/api/settings")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_creates_defaults_on_first_read(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.get("/api/settings", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["userId"] == "firebase-uid-sara"
        assert data["profileStyle"] == "simple"
        assert data["showInPublicSearch"] is True
        assert data["emailOnProfileView"] is False
        assert data["emailProfileTips"] is True

    @pytest.mark.asyncio
    async def test_defaults_are_persisted(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        first = (await client.get("/api/settings", headers=auth_headers)).json()
        second = (await client.get("/api/settings", headers=auth_headers)).json()

        assert first == second


class TestPatchSettings:
    @pytest.mark.asyncio
    async def test_partial_update(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        await client.get("/api/settings", headers=auth_headers)

        response = await client.patch(
            "/api/settings", json={"profileStyle": "detailed"}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["profileStyle"] == "detailed"
        assert data["emailProfileTips"] is True

        reread = (await client.get("/api/settings", headers=auth_headers)).json()
        assert reread["profileStyle"] == "detailed"

    @pytest.mark.asyncio
    async def test_patch_before_first_read_creates_row(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.patch(
            "/api/settings", json={"emailOnProfileView": True}, headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()
        assert data["emailOnProfileView"] is True
        assert data["profileStyle"] == "simple"

    @pytest.mark.asyncio
    async def test_accepts_snake_case_keys(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.patch(
            "/api/settings", json={"email_profile_tips": False}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["emailProfileTips"] is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"profileStyle": "verbose"},
            {"profileStyle": None},
            {"showInPublicSearch": "maybe"},
        ],
    )
    async def test_rejects_invalid_values(
        self, client: AsyncClient, auth_headers: dict[str, str], body: dict
    ) -> None:
        response = await client.patch("/api/settings", json=body, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_settings_are_per_user(
        self,
        client: AsyncClient,
        auth_headers: dict[str, str],
        other_auth_headers: dict[str, str],
    ) -> None:
        await client.patch("/api/settings", json={"profileStyle": "detailed"}, headers=auth_headers)

        other = (await client.get("/api/settings", headers=other_auth_headers)).json()

        assert other["profileStyle"] == "simple"
