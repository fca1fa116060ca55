"""User directory and profile business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import or_, select

from skillswap.db.models import SkillOffered, SkillWanted, User
from skillswap.pagination import paginate

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from skillswap.users.schemas import ProfileUpdateRequest

logger = structlog.get_logger()


async def list_directory(
    db: AsyncSession,
    viewer: User,
    search: str | None = None,
    skill: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[User], int]:
    """
    Public member directory, newest first.

    Admin accounts and deactivated users are never listed. Non-admin viewers
    only see public profiles. `search` matches name or location, `skill`
    matches offered or wanted skill names; both are case-insensitive
    substring matches and combine with AND.
    """
    query = (
        select(User)
        .where(User.is_active.is_(True))
        .where(User.role != "admin")
        .order_by(User.created_at.desc(), User.id.desc())
    )
    if not viewer.is_admin:
        query = query.where(User.is_public.is_(True))

    if search:
        query = query.where(
            or_(
                User.name.icontains(search, autoescape=True),
                User.location.icontains(search, autoescape=True),
            )
        )
    if skill:
        query = query.where(
            or_(
                User.skills_offered.any(SkillOffered.skill.icontains(skill, autoescape=True)),
                User.skills_wanted.any(SkillWanted.skill.icontains(skill, autoescape=True)),
            )
        )

    return await paginate(db, query, page, limit)


async def get_visible_profile(db: AsyncSession, viewer: User, user_id: int) -> User:
    """
    Fetch another user's profile if the viewer may see it.

    Raises:
        LookupError: User missing or deactivated.
        PermissionError: Profile is private and viewer is neither owner nor admin.
    """
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        msg = "User not found"
        raise LookupError(msg)

    if not user.is_public and not viewer.is_admin and viewer.id != user.id:
        msg = "Profile is private"
        raise PermissionError(msg)
    return user


async def update_profile(db: AsyncSession, user: User, body: ProfileUpdateRequest) -> User:
    """
    Apply an allow-listed profile update.

    Only fields present in the request are touched; skill lists replace the
    stored lists wholesale.
    """
    changes = body.model_dump(exclude_unset=True)

    if changes.get("name") is not None:
        user.name = body.name.strip()  # type: ignore[union-attr]
    if "location" in changes:
        user.location = body.location.strip() if body.location else None
    if changes.get("profile_photo") is not None:
        user.profile_photo = body.profile_photo  # type: ignore[assignment]
    if changes.get("is_public") is not None:
        user.is_public = body.is_public  # type: ignore[assignment]

    if body.availability is not None:
        user.available_weekdays = body.availability.weekdays
        user.available_weekends = body.availability.weekends
        user.available_evenings = body.availability.evenings
        user.time_zone = body.availability.time_zone

    if body.skills_offered is not None:
        user.skills_offered = [
            SkillOffered(position=i, skill=s.skill, description=s.description, experience=s.experience)
            for i, s in enumerate(body.skills_offered)
        ]
    if body.skills_wanted is not None:
        user.skills_wanted = [
            SkillWanted(position=i, skill=s.skill, description=s.description, urgency=s.urgency)
            for i, s in enumerate(body.skills_wanted)
        ]

    await db.flush()
    logger.info("profile_updated", user_id=user.id, fields=sorted(changes))
    return user


# ---------------------------------------------------------------------------
# Admin user management
# ---------------------------------------------------------------------------


async def list_all_users(db: AsyncSession, page: int = 1, limit: int = 10) -> tuple[list[User], int]:
    """Every user including admins and deactivated accounts, newest first."""
    query = select(User).order_by(User.created_at.desc(), User.id.desc())
    return await paginate(db, query, page, limit)


async def toggle_user_status(db: AsyncSession, user_id: int) -> User:
    """
    Flip a user's active flag.

    Raises:
        LookupError: If the user does not exist.
    """
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        msg = "User not found"
        raise LookupError(msg)

    user.is_active = not user.is_active
    user.ban_expires_at = None
    await db.flush()
    logger.info("user_status_toggled", user_id=user.id, is_active=user.is_active)
    return user
