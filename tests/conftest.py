"""Shared test fixtures.

Each test gets a fresh SQLite database file (schema from Base.metadata) and
an in-memory stand-in for the Redis dependency.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.config import get_settings
from skillswap.database import close_db, get_engine, get_session, init_db
from skillswap.db import models  # noqa: F401
from skillswap.db.base import Base
from skillswap.main import create_app
from skillswap.redis_client import get_redis

ADMIN_EMAIL = "admin@example.com"
PASSWORD = "secret123"


class InMemoryRedis:
    """The handful of Redis commands the login lockout uses."""

    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def incr(self, key: str) -> int:
        value = int(self.store.get(key, "0")) + 1
        self.store[key] = str(value)
        return value

    async def expire(self, key: str, seconds: int) -> bool:
        self.ttls[key] = seconds
        return key in self.store

    async def delete(self, *keys: str) -> int:
        removed = 0
        for key in keys:
            removed += self.store.pop(key, None) is not None
            self.ttls.pop(key, None)
        return removed

    async def ping(self) -> bool:
        return True


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch: pytest.MonkeyPatch) -> Any:
    """Deterministic settings for every test."""
    monkeypatch.setenv("SKILLSWAP_ENVIRONMENT", "test")
    monkeypatch.setenv("SKILLSWAP_LOG_FORMAT", "console")
    monkeypatch.setenv("SKILLSWAP_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("SKILLSWAP_JWT_SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
    monkeypatch.setenv("SKILLSWAP_ADMIN_EMAILS", f'["{ADMIN_EMAIL}"]')
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_redis() -> InMemoryRedis:
    return InMemoryRedis()


@pytest_asyncio.fixture
async def client(tmp_path: Any, fake_redis: InMemoryRedis) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against a fresh app and database."""
    await init_db(f"sqlite+aiosqlite:///{tmp_path / 'skillswap.db'}")
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app = create_app()
    app.dependency_overrides[get_redis] = lambda: fake_redis

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await close_db()


@pytest_asyncio.fixture
async def db_session(client: AsyncClient) -> AsyncGenerator[AsyncSession, None]:
    """Direct database session for arranging data and asserting on it."""
    async for session in get_session():
        yield session
        break


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


@dataclass
class Member:
    """A registered account plus its bearer token."""

    id: int
    email: str
    token: str
    profile: dict[str, Any] = field(default_factory=dict)

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


async def register(
    client: AsyncClient,
    name: str,
    email: str,
    password: str = PASSWORD,
    **extra: Any,
) -> Member:
    """Register through the API and return the new member."""
    response = await client.post(
        "/api/auth/register",
        json={"name": name, "email": email, "password": password, **extra},
    )
    assert response.status_code == 201, response.text
    data = response.json()
    return Member(id=data["user"]["id"], email=email, token=data["token"], profile=data["user"])


@pytest_asyncio.fixture
async def alice(client: AsyncClient) -> Member:
    member = await register(client, "Alice", "alice@example.com", location="Berlin")
    response = await client.put(
        "/api/users/profile",
        headers=member.headers,
        json={
            "skillsOffered": [{"skill": "Python", "experience": "Advanced"}],
            "skillsWanted": [{"skill": "Guitar", "urgency": "High"}],
        },
    )
    assert response.status_code == 200, response.text
    member.profile = response.json()
    return member


@pytest_asyncio.fixture
async def bob(client: AsyncClient) -> Member:
    member = await register(client, "Bob", "bob@example.com", location="Lisbon")
    response = await client.put(
        "/api/users/profile",
        headers=member.headers,
        json={
            "skillsOffered": [{"skill": "Guitar", "experience": "Intermediate"}],
            "skillsWanted": [{"skill": "Python"}],
        },
    )
    assert response.status_code == 200, response.text
    member.profile = response.json()
    return member


@pytest_asyncio.fixture
async def admin(client: AsyncClient) -> Member:
    return await register(client, "Admin", ADMIN_EMAIL)


async def create_swap(client: AsyncClient, requester: Member, recipient: Member, **extra: Any) -> dict[str, Any]:
    """Send a Guitar-for-Python swap request and return it."""
    body = {
        "recipientId": recipient.id,
        "requestedSkill": "Guitar",
        "offeredSkill": "Python",
        **extra,
    }
    response = await client.post("/api/swaps", headers=requester.headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()["swapRequest"]


async def complete_swap(client: AsyncClient, requester: Member, recipient: Member) -> dict[str, Any]:
    """Create a swap and drive it to completed."""
    swap = await create_swap(client, requester, recipient)
    accepted = await client.patch(
        f"/api/swaps/{swap['id']}/status", headers=recipient.headers, json={"status": "accepted"}
    )
    assert accepted.status_code == 200, accepted.text
    completed = await client.patch(
        f"/api/swaps/{swap['id']}/status", headers=requester.headers, json={"status": "completed"}
    )
    assert completed.status_code == 200, completed.text
    return completed.json()["swapRequest"]
