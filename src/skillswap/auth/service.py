"""
Authentication business logic.

Handles registration, password login, failed-login lockout and lazy
expiry of temporary bans.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select

from skillswap.auth.password import (
    check_needs_rehash,
    hash_password,
    validate_password_strength,
    verify_password,
)
from skillswap.config import get_settings
from skillswap.db.base import as_utc
from skillswap.db.models import User

if TYPE_CHECKING:
    from redis.asyncio import Redis
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# User queries
# ---------------------------------------------------------------------------


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email (case-insensitive)."""
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower().strip()))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


async def register_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    location: str | None = None,
) -> User:
    """
    Register a new user with email + password.

    Emails listed in settings.admin_emails are created with the admin role.

    Raises:
        PasswordStrengthError: If the password fails the length checks.
        ValueError: If the email is already registered.
    """
    validate_password_strength(password)

    email = email.lower().strip()
    if await get_user_by_email(db, email) is not None:
        msg = "Email already registered"
        raise ValueError(msg)

    settings = get_settings()
    admin_emails = {e.lower().strip() for e in settings.admin_emails}
    now = datetime.now(timezone.utc)

    user = User(
        name=name.strip(),
        email=email,
        password_hash=hash_password(password),
        location=location.strip() if location else None,
        role="admin" if email in admin_emails else "user",
        joined_at=now,
        skills_offered=[],
        skills_wanted=[],
    )
    db.add(user)
    await db.flush()
    logger.info("user_registered", user_id=user.id, role=user.role)
    return user


# ---------------------------------------------------------------------------
# Login
# ---------------------------------------------------------------------------


async def authenticate_user(
    db: AsyncSession,
    redis: Redis,
    email: str,
    password: str,
) -> User:
    """
    Authenticate a user with email + password.

    Raises:
        ValueError: If credentials are invalid.
        PermissionError: If the account is locked or deactivated.
    """
    user = await get_user_by_email(db, email)
    if user is None:
        msg = "Invalid email or password"
        raise ValueError(msg)

    if await check_account_lockout(redis, user.id):
        msg = "Account temporarily locked. Try again later."
        raise PermissionError(msg)

    if not verify_password(password, user.password_hash):
        await increment_failed_login(redis, user.id)
        msg = "Invalid email or password"
        raise ValueError(msg)

    lift_expired_ban(user)
    if not user.is_active:
        msg = "Account is deactivated"
        raise PermissionError(msg)

    await clear_failed_login(redis, user.id)

    if check_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)

    await db.flush()
    logger.info("user_logged_in", user_id=user.id)
    return user


def lift_expired_ban(user: User, now: datetime | None = None) -> bool:
    """
    Reactivate a user whose temporary ban has run out.

    Bans are only lifted here, when the user next authenticates; there is no
    background sweep. Returns True if the user was reactivated.
    """
    expires_at = as_utc(user.ban_expires_at)
    if user.is_active or expires_at is None:
        return False
    if expires_at > (now or datetime.now(timezone.utc)):
        return False

    user.is_active = True
    user.ban_expires_at = None
    logger.info("ban_expired", user_id=user.id)
    return True


# ---------------------------------------------------------------------------
# Account lockout (Redis counters)
# ---------------------------------------------------------------------------


async def check_account_lockout(redis: Redis, user_id: int) -> bool:
    """Return True if the account has reached the failed-login threshold."""
    settings = get_settings()
    count_str = await redis.get(f"login_attempts:{user_id}")
    if count_str is None:
        return False
    return int(count_str) >= settings.account_lockout_threshold


async def increment_failed_login(redis: Redis, user_id: int) -> int:
    """Increment the failed-login counter; the first failure starts the lockout window."""
    settings = get_settings()
    key = f"login_attempts:{user_id}"
    count = await redis.incr(key)
    if count == 1:
        await redis.expire(key, settings.account_lockout_duration_minutes * 60)
    return int(count)


async def clear_failed_login(redis: Redis, user_id: int) -> None:
    """Reset the failed-login counter after a successful login."""
    await redis.delete(f"login_attempts:{user_id}")
