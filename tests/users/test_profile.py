"""Profile view and update tests."""

from __future__ import annotations

import pytest
from httpx import AsyncClient

from tests.conftest import Member, register


class TestOwnProfile:
    @pytest.mark.asyncio
    async def test_get_me_includes_email(self, client: AsyncClient, alice: Member):
        response = await client.get("/api/users/me", headers=alice.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["email"] == "alice@example.com"
        assert data["skillsOffered"] == [{"skill": "Python", "description": None, "experience": "Advanced"}]
        assert data["skillsWanted"] == [{"skill": "Guitar", "description": None, "urgency": "High"}]

    @pytest.mark.asyncio
    async def test_update_allow_listed_fields(self, client: AsyncClient, alice: Member):
        response = await client.put(
            "/api/users/profile",
            headers=alice.headers,
            json={
                "name": "Alice Liddell",
                "location": "Oxford",
                "profilePhoto": "https://example.com/a.png",
                "availability": {"weekdays": True, "evenings": True, "timeZone": "Europe/London"},
                "isPublic": False,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Alice Liddell"
        assert data["location"] == "Oxford"
        assert data["profilePhoto"] == "https://example.com/a.png"
        assert data["availability"] == {
            "weekdays": True,
            "weekends": False,
            "evenings": True,
            "timeZone": "Europe/London",
        }
        assert data["isPublic"] is False
        # Skills untouched when not sent
        assert [s["skill"] for s in data["skillsOffered"]] == ["Python"]

    @pytest.mark.asyncio
    async def test_privileged_fields_dropped(self, client: AsyncClient, alice: Member):
        response = await client.put(
            "/api/users/profile",
            headers=alice.headers,
            json={
                "name": "Alice",
                "role": "admin",
                "email": "hijack@example.com",
                "isActive": False,
                "rating": {"average": 5, "count": 100},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "user"
        assert data["email"] == "alice@example.com"
        assert data["isActive"] is True
        assert data["rating"] == {"average": 0.0, "count": 0}

    @pytest.mark.asyncio
    async def test_skill_lists_replaced_in_order(self, client: AsyncClient, alice: Member):
        response = await client.put(
            "/api/users/profile",
            headers=alice.headers,
            json={
                "skillsOffered": [
                    {"skill": "Rust"},
                    {"skill": "  Go  ", "experience": "Intermediate"},
                    {"skill": "SQL", "description": "Postgres mostly"},
                ],
                "skillsWanted": [],
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert [s["skill"] for s in data["skillsOffered"]] == ["Rust", "Go", "SQL"]
        assert data["skillsOffered"][0]["experience"] == "Beginner"
        assert data["skillsWanted"] == []

    @pytest.mark.asyncio
    async def test_invalid_experience_rejected(self, client: AsyncClient, alice: Member):
        response = await client.put(
            "/api/users/profile",
            headers=alice.headers,
            json={"skillsOffered": [{"skill": "Rust", "experience": "Guru"}]},
        )
        assert response.status_code == 400


class TestViewProfile:
    @pytest.mark.asyncio
    async def test_public_profile_hides_email(self, client: AsyncClient, alice: Member, bob: Member):
        response = await client.get(f"/api/users/{alice.id}", headers=bob.headers)
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Alice"
        assert "email" not in data

    @pytest.mark.asyncio
    async def test_private_profile_forbidden(self, client: AsyncClient, alice: Member, bob: Member):
        await client.put("/api/users/profile", headers=alice.headers, json={"isPublic": False})
        response = await client.get(f"/api/users/{alice.id}", headers=bob.headers)
        assert response.status_code == 403
        assert response.json()["message"] == "Profile is private"

    @pytest.mark.asyncio
    async def test_private_profile_visible_to_owner_and_admin(
        self, client: AsyncClient, alice: Member, admin: Member
    ):
        await client.put("/api/users/profile", headers=alice.headers, json={"isPublic": False})
        own = await client.get(f"/api/users/{alice.id}", headers=alice.headers)
        assert own.status_code == 200
        as_admin = await client.get(f"/api/users/{alice.id}", headers=admin.headers)
        assert as_admin.status_code == 200

    @pytest.mark.asyncio
    async def test_unknown_user_404(self, client: AsyncClient, alice: Member):
        response = await client.get("/api/users/9999", headers=alice.headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_inactive_user_404(self, client: AsyncClient, alice: Member, admin: Member):
        carol = await register(client, "Carol", "carol@example.com")
        await client.patch(f"/api/users/admin/{carol.id}/toggle-status", headers=admin.headers)
        response = await client.get(f"/api/users/{carol.id}", headers=alice.headers)
        assert response.status_code == 404
