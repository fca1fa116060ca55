"""User directory router: all /api/users/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.auth.dependencies import get_current_user, require_admin
from skillswap.database import get_session
from skillswap.db.models import User
from skillswap.pagination import PageParams, build_page
from skillswap.schemas import Page
from skillswap.users.schemas import (
    ProfileUpdateRequest,
    PublicUserResponse,
    UserResponse,
    UserStatusResponse,
    public_user_response,
    user_response,
)
from skillswap.users.service import (
    get_visible_profile,
    list_all_users,
    list_directory,
    toggle_user_status,
    update_profile,
)

router = APIRouter(prefix="/api/users", tags=["Users"])


# ---------------------------------------------------------------------------
# Admin (declared before /{user_id} so the literal path wins)
# ---------------------------------------------------------------------------


@router.get("/admin/all", response_model=Page[UserResponse])
async def admin_list_users(
    params: PageParams = Depends(),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> Page[UserResponse]:
    """List every account, including admins and deactivated users."""
    users, total = await list_all_users(db, params.page, params.limit)
    return build_page(users, total, params.page, params.limit, user_response)


@router.patch("/admin/{user_id}/toggle-status", response_model=UserStatusResponse)
async def admin_toggle_status(
    user_id: int,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> UserStatusResponse:
    """Activate or deactivate an account."""
    try:
        user = await toggle_user_status(db, user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    await db.commit()
    state = "activated" if user.is_active else "deactivated"
    return UserStatusResponse(message=f"User {state} successfully", user=user_response(user))


# ---------------------------------------------------------------------------
# Directory & profile
# ---------------------------------------------------------------------------


@router.get("", response_model=Page[PublicUserResponse])
async def list_users(
    search: str | None = Query(None, max_length=100),
    skill: str | None = Query(None, max_length=100),
    params: PageParams = Depends(),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> Page[PublicUserResponse]:
    """Browse members by name/location or skill."""
    users, total = await list_directory(db, user, search, skill, params.page, params.limit)
    return build_page(users, total, params.page, params.limit, public_user_response)


@router.get("/me", response_model=UserResponse)
async def get_my_profile(
    user: User = Depends(get_current_user),
) -> UserResponse:
    """Get own full profile."""
    return user_response(user)


@router.put("/profile", response_model=UserResponse)
async def update_my_profile(
    body: ProfileUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Update name, location, photo, skills, availability and visibility."""
    user = await update_profile(db, user, body)
    await db.commit()
    return user_response(user)


@router.get("/{user_id}", response_model=PublicUserResponse)
async def get_profile(
    user_id: int,
    viewer: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> PublicUserResponse:
    """View another member's profile."""
    try:
        user = await get_visible_profile(db, viewer, user_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e
    return public_user_response(user)
