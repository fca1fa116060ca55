"""Liveness, readiness and version endpoints. None of them require authentication."""

from collections.abc import Awaitable
from datetime import datetime, timezone

import redis.asyncio as redis
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.config import get_settings
from skillswap.database import get_session
from skillswap.redis_client import get_redis

router = APIRouter(prefix="/api")


async def _check(probe: Awaitable[object]) -> str:
    try:
        await probe
    except Exception as exc:
        return f"error: {exc}"
    return "ok"


@router.get("/health")
async def health() -> dict[str, str]:
    """The process is up; no dependencies are touched."""
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
async def readiness(
    db: AsyncSession = Depends(get_session),  # noqa: B008
    cache: redis.Redis = Depends(get_redis),  # noqa: B008
) -> dict[str, object]:
    """Database and the lockout-counter store both answer."""
    checks = {
        "database": await _check(db.execute(text("SELECT 1"))),
        "redis": await _check(cache.ping()),
    }
    all_ok = all(v == "ok" for v in checks.values())
    return {"status": "ready" if all_ok else "degraded", "checks": checks}


@router.get("/version")
async def version() -> dict[str, str]:
    settings = get_settings()
    return {"version": settings.app_version, "environment": settings.environment}
