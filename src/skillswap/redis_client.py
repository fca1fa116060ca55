"""
Shared Redis client.

SkillSwap keeps only short-lived counters here: failed-login tallies under
``login_attempts:{user_id}`` (see auth.service), expired by Redis itself.
The readiness endpoint pings the same client.
"""

import redis.asyncio as redis

_client: redis.Redis | None = None


async def init_redis(url: str) -> None:
    """Connect the shared client; string replies, small pool."""
    global _client  # noqa: PLW0603
    _client = redis.from_url(  # type: ignore[no-untyped-call]
        url,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is not None:
        await _client.aclose()
        _client = None


def get_redis() -> redis.Redis:
    """FastAPI dependency for the lockout counters."""
    if _client is None:
        msg = "Redis client is not connected; init_redis() runs in the app lifespan"
        raise RuntimeError(msg)
    return _client
