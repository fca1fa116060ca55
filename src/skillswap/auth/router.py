"""Authentication router: all /api/auth/* endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, HTTPException
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.auth.dependencies import get_current_user
from skillswap.auth.jwt import create_access_token
from skillswap.auth.schemas import AuthResponse, LoginRequest, RegisterRequest
from skillswap.auth.service import authenticate_user, register_user
from skillswap.config import get_settings
from skillswap.database import get_session
from skillswap.db.models import User
from skillswap.redis_client import get_redis
from skillswap.users.schemas import UserResponse, user_response

logger = structlog.get_logger()

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _issue_token(user: User) -> AuthResponse:
    settings = get_settings()
    return AuthResponse(
        token=create_access_token(user.id, user.role),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
        user=user_response(user),
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Register with name, email and password."""
    try:
        user = await register_user(
            db,
            name=body.name,
            email=body.email,
            password=body.password,
            location=body.location,
        )
    except ValueError as e:
        # PasswordStrengthError is a ValueError too
        raise HTTPException(status_code=400, detail=str(e)) from e

    await db.commit()
    return _issue_token(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_session),
    redis: Redis = Depends(get_redis),  # type: ignore[assignment]
) -> AuthResponse:
    """Login with email + password."""
    try:
        user = await authenticate_user(db, redis, body.email, body.password)
    except ValueError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e
    except PermissionError as e:
        detail = str(e)
        if "locked" in detail.lower():
            raise HTTPException(status_code=429, detail=detail) from e
        raise HTTPException(status_code=403, detail=detail) from e

    await db.commit()
    return _issue_token(user)


@router.get("/me", response_model=UserResponse)
async def me(
    user: User = Depends(get_current_user),
) -> UserResponse:
    """Get the authenticated user's full profile."""
    return user_response(user)
