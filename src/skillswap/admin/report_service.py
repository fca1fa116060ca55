"""Aggregate report generation.

A report is computed once, stored with its JSON payload and served back
verbatim on download. Payload keys are camelCase because the payload is
returned to clients as-is.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import func, select

from skillswap.db.base import as_utc
from skillswap.db.models import Rating, Report, SkillOffered, SkillWanted, SwapRequest, User
from skillswap.pagination import paginate
from skillswap.ratings.service import round_half_up

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

POPULAR_SKILLS_LIMIT = 10
SKILL_ANALYTICS_LIMIT = 20


def _normalize(value: datetime) -> datetime:
    """Naive input is taken as UTC; aware input is converted to UTC."""
    return as_utc(value).astimezone(timezone.utc)  # type: ignore[union-attr]


def _iso(value: datetime | None) -> str | None:
    value = as_utc(value)
    return value.isoformat() if value else None


def report_file_name(report_type: str, start: datetime, end: datetime) -> str:
    return f"{report_type}_{start.date().isoformat()}_to_{end.date().isoformat()}.json"


def payload_size(data: dict[str, Any]) -> int:
    """Length of the compact JSON encoding of a report payload."""
    return len(json.dumps(data, separators=(",", ":")))


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


async def user_activity_report(db: AsyncSession, start: datetime, end: datetime) -> dict[str, Any]:
    created_in_range = User.created_at.between(start, end)

    new_users = (await db.execute(select(func.count()).select_from(User).where(created_in_range))).scalar_one()
    active_users = (
        await db.execute(
            select(func.count())
            .select_from(User)
            .where(User.is_active.is_(True))
            .where(User.updated_at.between(start, end))
        )
    ).scalar_one()

    count = func.count(User.id).label("count")
    by_location = await db.execute(
        select(User.location, count)
        .where(created_in_range)
        .group_by(User.location)
        .order_by(count.desc(), User.location)
    )

    return {
        "summary": {"newUsers": new_users, "activeUsers": active_users},
        "usersByLocation": [{"location": location, "count": n} for location, n in by_location.all()],
    }


async def swap_stats_report(db: AsyncSession, start: datetime, end: datetime) -> dict[str, Any]:
    in_range = SwapRequest.created_at.between(start, end)

    total = (await db.execute(select(func.count()).select_from(SwapRequest).where(in_range))).scalar_one()

    by_status = await db.execute(
        select(SwapRequest.status, func.count(SwapRequest.id))
        .where(in_range)
        .group_by(SwapRequest.status)
        .order_by(SwapRequest.status)
    )

    count = func.count(SwapRequest.id).label("count")
    popular = await db.execute(
        select(SwapRequest.requested_skill, count)
        .where(in_range)
        .group_by(SwapRequest.requested_skill)
        .order_by(count.desc(), SwapRequest.requested_skill)
        .limit(POPULAR_SKILLS_LIMIT)
    )

    return {
        "summary": {"totalSwaps": total},
        "swapsByStatus": [{"status": status, "count": n} for status, n in by_status.all()],
        "popularSkills": [{"skill": skill, "count": n} for skill, n in popular.all()],
    }


async def feedback_logs_report(db: AsyncSession, start: datetime, end: datetime) -> dict[str, Any]:
    in_range = Rating.created_at.between(start, end)

    ratings = (
        await db.execute(select(Rating).where(in_range).order_by(Rating.created_at.desc(), Rating.id.desc()))
    ).scalars().all()
    avg = (await db.execute(select(func.avg(Rating.rating)).where(in_range))).scalar_one()
    distribution = await db.execute(
        select(Rating.rating, func.count(Rating.id)).where(in_range).group_by(Rating.rating).order_by(Rating.rating)
    )

    return {
        "ratings": [
            {
                "id": r.id,
                "swapRequestId": r.swap_request_id,
                "rater": {"id": r.rater.id, "name": r.rater.name},
                "rated": {"id": r.rated.id, "name": r.rated.name},
                "rating": r.rating,
                "feedback": r.feedback,
                "createdAt": _iso(r.created_at),
            }
            for r in ratings
        ],
        "averageRating": round_half_up(avg, 2) if avg is not None else 0,
        "ratingDistribution": [{"rating": stars, "count": n} for stars, n in distribution.all()],
    }


async def skill_analytics_report(db: AsyncSession, start: datetime, end: datetime) -> dict[str, Any]:
    """Most common skills across every profile. The date range only labels the report."""

    async def top(model: type[SkillOffered] | type[SkillWanted]) -> list[dict[str, Any]]:
        count = func.count(model.id).label("count")
        rows = await db.execute(
            select(model.skill, count).group_by(model.skill).order_by(count.desc(), model.skill).limit(
                SKILL_ANALYTICS_LIMIT
            )
        )
        return [{"skill": skill, "count": n} for skill, n in rows.all()]

    return {
        "skillsOffered": await top(SkillOffered),
        "skillsWanted": await top(SkillWanted),
    }


GENERATORS: dict[str, Callable[[AsyncSession, datetime, datetime], Awaitable[dict[str, Any]]]] = {
    "user_activity": user_activity_report,
    "swap_stats": swap_stats_report,
    "feedback_logs": feedback_logs_report,
    "skill_analytics": skill_analytics_report,
}


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


async def generate_report(
    db: AsyncSession,
    generator: User,
    report_type: str,
    start_date: datetime,
    end_date: datetime,
) -> Report:
    """
    Compute and store a report snapshot.

    Raises:
        ValueError: Unknown report type, or end date before start date.
    """
    build = GENERATORS.get(report_type)
    if build is None:
        msg = "Invalid report type"
        raise ValueError(msg)

    start, end = _normalize(start_date), _normalize(end_date)
    if end < start:
        msg = "endDate must not be before startDate"
        raise ValueError(msg)

    data = await build(db, start, end)
    data["generatedAt"] = datetime.now(timezone.utc).isoformat()

    report = Report(
        report_type=report_type,
        generated_by=generator,
        start_date=start,
        end_date=end,
        data=data,
        file_name=report_file_name(report_type, start, end),
        file_size=payload_size(data),
    )
    db.add(report)
    await db.flush()
    logger.info(
        "report_generated",
        report_id=report.id,
        report_type=report_type,
        generated_by=generator.id,
        file_size=report.file_size,
    )
    return report


async def list_reports(
    db: AsyncSession,
    report_type: str | None = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[list[Report], int]:
    query = select(Report).order_by(Report.created_at.desc(), Report.id.desc())
    if report_type:
        query = query.where(Report.report_type == report_type)
    return await paginate(db, query, page, limit)


async def download_report(db: AsyncSession, report_id: int) -> Report:
    """
    Fetch a report for download and bump its download counter.

    Raises:
        LookupError: Unknown report.
    """
    report = await db.get(Report, report_id)
    if report is None:
        msg = "Report not found"
        raise LookupError(msg)

    report.download_count += 1
    await db.flush()
    logger.info("report_downloaded", report_id=report_id, download_count=report.download_count)
    return report
