"""Rating router: all /api/ratings/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.auth.dependencies import get_current_user
from skillswap.database import get_session
from skillswap.db.models import User
from skillswap.pagination import PageParams, build_page
from skillswap.ratings.schemas import (
    RatingCreatedResponse,
    RatingCreateRequest,
    RatingResponse,
    rating_response,
)
from skillswap.ratings.service import create_rating, list_ratings_for_user
from skillswap.schemas import Page

router = APIRouter(prefix="/api/ratings", tags=["Ratings"])


@router.post("", response_model=RatingCreatedResponse, status_code=201)
async def rate_user(
    body: RatingCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> RatingCreatedResponse:
    """Rate the other participant of a completed swap."""
    scores = body.skills
    try:
        rating = await create_rating(
            db,
            user,
            swap_request_id=body.swap_request_id,
            rated_user_id=body.rated_user_id,
            rating=body.rating,
            feedback=body.feedback,
            communication=scores.communication if scores else None,
            reliability=scores.reliability if scores else None,
            expertise=scores.expertise if scores else None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e)) from e

    await db.commit()
    return RatingCreatedResponse(message="Rating submitted successfully", rating=rating_response(rating))


@router.get("/user/{user_id}", response_model=Page[RatingResponse])
async def ratings_for_user(
    user_id: int,
    params: PageParams = Depends(),
    _user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> Page[RatingResponse]:
    """Ratings a member has received, newest first."""
    ratings, total = await list_ratings_for_user(db, user_id, params.page, params.limit)
    return build_page(ratings, total, params.page, params.limit, rating_response)
