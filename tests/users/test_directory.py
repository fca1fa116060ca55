"""Member directory search and admin user management."""

from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.db.models import User
from tests.conftest import Member, register


def _names(data: dict) -> list[str]:
    return [u["name"] for u in data["items"]]


class TestDirectory:
    @pytest.mark.asyncio
    async def test_lists_active_public_non_admin_users(
        self, client: AsyncClient, alice: Member, bob: Member, admin: Member
    ):
        response = await client.get("/api/users", headers=alice.headers)
        assert response.status_code == 200
        data = response.json()
        assert sorted(_names(data)) == ["Alice", "Bob"]
        assert data["total"] == 2
        assert data["currentPage"] == 1
        assert data["totalPages"] == 1
        assert all("email" not in u for u in data["items"])

    @pytest.mark.asyncio
    async def test_newest_first(self, client: AsyncClient, alice: Member, bob: Member):
        response = await client.get("/api/users", headers=alice.headers)
        assert _names(response.json()) == ["Bob", "Alice"]

    @pytest.mark.asyncio
    async def test_private_profiles_hidden_from_users_but_not_admins(
        self, client: AsyncClient, alice: Member, bob: Member, admin: Member
    ):
        await client.put("/api/users/profile", headers=bob.headers, json={"isPublic": False})
        as_alice = await client.get("/api/users", headers=alice.headers)
        assert _names(as_alice.json()) == ["Alice"]
        as_admin = await client.get("/api/users", headers=admin.headers)
        assert sorted(_names(as_admin.json())) == ["Alice", "Bob"]

    @pytest.mark.asyncio
    async def test_search_name_and_location(self, client: AsyncClient, alice: Member, bob: Member):
        by_name = await client.get("/api/users", headers=alice.headers, params={"search": "ali"})
        assert _names(by_name.json()) == ["Alice"]
        by_location = await client.get("/api/users", headers=alice.headers, params={"search": "LISBON"})
        assert _names(by_location.json()) == ["Bob"]

    @pytest.mark.asyncio
    async def test_skill_filter_matches_offered_or_wanted(self, client: AsyncClient, alice: Member, bob: Member):
        response = await client.get("/api/users", headers=alice.headers, params={"skill": "guit"})
        assert sorted(_names(response.json())) == ["Alice", "Bob"]

    @pytest.mark.asyncio
    async def test_search_and_skill_combine(self, client: AsyncClient, alice: Member, bob: Member):
        response = await client.get("/api/users", headers=alice.headers, params={"search": "bob", "skill": "python"})
        assert _names(response.json()) == ["Bob"]

    @pytest.mark.asyncio
    async def test_wildcards_are_literal(self, client: AsyncClient, alice: Member, bob: Member):
        response = await client.get("/api/users", headers=alice.headers, params={"search": "%"})
        assert response.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_pagination(self, client: AsyncClient, alice: Member):
        for i in range(4):
            await register(client, f"Member {i}", f"member{i}@example.com")
        response = await client.get("/api/users", headers=alice.headers, params={"page": 2, "limit": 2})
        data = response.json()
        assert data["total"] == 5
        assert data["totalPages"] == 3
        assert data["currentPage"] == 2
        assert len(data["items"]) == 2

    @pytest.mark.asyncio
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.get("/api/users")
        assert response.status_code == 401


class TestAdminUserManagement:
    @pytest.mark.asyncio
    async def test_admin_lists_everyone(self, client: AsyncClient, alice: Member, admin: Member):
        response = await client.get("/api/users/admin/all", headers=admin.headers)
        assert response.status_code == 200
        data = response.json()
        assert sorted(_names(data)) == ["Admin", "Alice"]
        assert all("email" in u for u in data["items"])

    @pytest.mark.asyncio
    async def test_non_admin_forbidden(self, client: AsyncClient, alice: Member):
        response = await client.get("/api/users/admin/all", headers=alice.headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Admin access required"

    @pytest.mark.asyncio
    async def test_toggle_status(self, client: AsyncClient, alice: Member, admin: Member):
        response = await client.patch(f"/api/users/admin/{alice.id}/toggle-status", headers=admin.headers)
        assert response.status_code == 200
        assert response.json()["message"] == "User deactivated successfully"
        assert response.json()["user"]["isActive"] is False

        blocked = await client.get("/api/users/me", headers=alice.headers)
        assert blocked.status_code == 403

        response = await client.patch(f"/api/users/admin/{alice.id}/toggle-status", headers=admin.headers)
        assert response.json()["message"] == "User activated successfully"

    @pytest.mark.asyncio
    async def test_toggle_clears_timed_ban(
        self, client: AsyncClient, alice: Member, admin: Member, db_session: AsyncSession
    ):
        await client.patch(f"/api/admin/users/{alice.id}/ban", headers=admin.headers, json={"duration": 1})
        await client.patch(f"/api/users/admin/{alice.id}/toggle-status", headers=admin.headers)
        response = await client.patch(f"/api/users/admin/{alice.id}/toggle-status", headers=admin.headers)
        assert response.json()["user"]["isActive"] is False
        assert response.json()["user"]["banExpiresAt"] is None

        user = (await db_session.execute(select(User).where(User.id == alice.id))).scalar_one()
        assert user.ban_expires_at is None

        blocked = await client.get("/api/auth/me", headers=alice.headers)
        assert blocked.status_code == 403

    @pytest.mark.asyncio
    async def test_toggle_unknown_user(self, client: AsyncClient, admin: Member):
        response = await client.patch("/api/users/admin/9999/toggle-status", headers=admin.headers)
        assert response.status_code == 404
