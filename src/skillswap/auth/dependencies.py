"""FastAPI authentication dependencies."""

from __future__ import annotations

import jwt
from fastapi import Depends, HTTPException, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.auth.jwt import verify_token
from skillswap.auth.service import get_user_by_id, lift_expired_ban
from skillswap.database import get_session
from skillswap.db.models import User

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    Extract and verify the bearer JWT, return the acting User.

    Raises 401 for a missing/invalid token or unknown user, 403 for a
    deactivated account.
    """
    if credentials is None:
        raise HTTPException(status_code=401, detail="Authentication required")

    try:
        payload = verify_token(credentials.credentials, expected_type="access")
        user_id = int(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        raise HTTPException(status_code=401, detail=str(e) or "Invalid token") from e

    user = await get_user_by_id(db, user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")

    if lift_expired_ban(user):
        await db.commit()
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is deactivated")
    return user


async def require_admin(
    user: User = Depends(get_current_user),
) -> User:
    """Same as get_current_user but additionally requires role=admin."""
    if not user.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
