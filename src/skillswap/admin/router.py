"""Admin router: all /api/admin/* endpoints. Every route requires role=admin."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from skillswap.admin.moderation_service import list_moderation_logs, reject_skill, toggle_ban
from skillswap.admin.report_service import download_report, generate_report, list_reports
from skillswap.admin.schemas import (
    AdminStatsResponse,
    BanRequest,
    MessageCreateRequest,
    MessageMutationResponse,
    MessageUpdateRequest,
    ModeratedUserResponse,
    ModerationAction,
    ModerationLogResponse,
    PlatformStats,
    RecentActivity,
    ReportGeneratedResponse,
    ReportGenerateRequest,
    ReportSummary,
    ReportType,
    Severity,
    SkillModerationRequest,
    admin_message_response,
    moderation_log_response,
    recent_user,
    report_response,
    report_summary,
)
from skillswap.admin.service import (
    create_platform_message,
    get_platform_stats,
    list_platform_messages,
    read_counts,
    set_message_active,
)
from skillswap.auth.dependencies import require_admin
from skillswap.database import get_session
from skillswap.db.models import User
from skillswap.messages.schemas import AdminMessageResponse
from skillswap.pagination import MonitorPageParams, PageParams, build_page
from skillswap.schemas import Page
from skillswap.swaps.schemas import SwapResponse, SwapStatus, swap_response
from skillswap.swaps.service import list_all_swaps
from skillswap.users.schemas import user_response

router = APIRouter(prefix="/api/admin", tags=["Admin"])


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------


@router.get("/stats", response_model=AdminStatsResponse)
async def platform_stats(
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> AdminStatsResponse:
    """Platform counters and recent activity."""
    result = await get_platform_stats(db)
    return AdminStatsResponse(
        stats=PlatformStats(**result["stats"]),
        recent_activity=RecentActivity(
            users=[recent_user(u) for u in result["recent_users"]],
            swaps=[swap_response(s) for s in result["recent_swaps"]],
        ),
    )


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------


@router.post("/moderate/skills/{user_id}", response_model=ModeratedUserResponse)
async def moderate_skill(
    user_id: int,
    body: SkillModerationRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ModeratedUserResponse:
    """Remove an inappropriate skill from a user's profile."""
    try:
        user = await reject_skill(db, admin, user_id, body.skill_type, body.skill_index, body.reason)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    await db.commit()
    return ModeratedUserResponse(message="Moderation action completed successfully", user=user_response(user))


@router.patch("/users/{user_id}/ban", response_model=ModeratedUserResponse)
async def ban_user(
    user_id: int,
    body: BanRequest | None = None,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ModeratedUserResponse:
    """Ban an active user (optionally for N days) or unban a banned one."""
    body = body or BanRequest()
    try:
        user = await toggle_ban(db, admin, user_id, reason=body.reason, duration_days=body.duration)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    await db.commit()
    state = "unbanned" if user.is_active else "banned"
    return ModeratedUserResponse(message=f"User {state} successfully", user=user_response(user))


@router.get("/moderation-logs", response_model=Page[ModerationLogResponse])
async def moderation_logs(
    action: ModerationAction | None = Query(None),
    severity: Severity | None = Query(None),
    params: MonitorPageParams = Depends(),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> Page[ModerationLogResponse]:
    """Moderation history, newest first."""
    logs, total = await list_moderation_logs(db, action, severity, params.page, params.limit)
    return build_page(logs, total, params.page, params.limit, moderation_log_response)


@router.get("/swaps", response_model=Page[SwapResponse])
async def all_swaps(
    status: SwapStatus | None = Query(None),
    params: MonitorPageParams = Depends(),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> Page[SwapResponse]:
    """Every swap request on the platform, for monitoring."""
    swaps, total = await list_all_swaps(db, status, params.page, params.limit)
    return build_page(swaps, total, params.page, params.limit, swap_response)


# ---------------------------------------------------------------------------
# Platform messages
# ---------------------------------------------------------------------------


@router.post("/messages", response_model=MessageMutationResponse, status_code=201)
async def create_message(
    body: MessageCreateRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> MessageMutationResponse:
    """Broadcast an announcement to every user."""
    message = await create_platform_message(
        db,
        admin,
        title=body.title,
        content=body.content,
        type=body.type,
        priority=body.priority,
        expires_at=body.expires_at,
    )
    await db.commit()
    return MessageMutationResponse(message="Platform message created successfully", data=admin_message_response(message))


@router.get("/messages", response_model=Page[AdminMessageResponse])
async def list_messages(
    params: PageParams = Depends(),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> Page[AdminMessageResponse]:
    """Every announcement, active or not, with read counts."""
    messages, total = await list_platform_messages(db, params.page, params.limit)
    counts = await read_counts(db, [m.id for m in messages])
    return build_page(
        messages,
        total,
        params.page,
        params.limit,
        lambda m: admin_message_response(m, counts.get(m.id, 0)),
    )


@router.patch("/messages/{message_id}", response_model=MessageMutationResponse)
async def update_message(
    message_id: int,
    body: MessageUpdateRequest,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> MessageMutationResponse:
    """Activate or deactivate an announcement."""
    try:
        message = await set_message_active(db, message_id, body.is_active)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    await db.commit()
    counts = await read_counts(db, [message.id])
    return MessageMutationResponse(
        message="Message updated successfully",
        data=admin_message_response(message, counts.get(message.id, 0)),
    )


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


@router.post("/reports/generate", response_model=ReportGeneratedResponse)
async def create_report(
    body: ReportGenerateRequest,
    admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> ReportGeneratedResponse:
    """Compute and store a report snapshot for a date range."""
    try:
        report = await generate_report(db, admin, body.report_type, body.start_date, body.end_date)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    await db.commit()
    return ReportGeneratedResponse(message="Report generated successfully", report=report_response(report))


@router.get("/reports", response_model=Page[ReportSummary])
async def reports(
    report_type: ReportType | None = Query(None, alias="reportType"),
    params: PageParams = Depends(),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> Page[ReportSummary]:
    """Report metadata, newest first."""
    rows, total = await list_reports(db, report_type, params.page, params.limit)
    return build_page(rows, total, params.page, params.limit, report_summary)


@router.get("/reports/{report_id}/download")
async def download(
    report_id: int,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_session),
) -> JSONResponse:
    """Download a report payload as a JSON attachment."""
    try:
        report = await download_report(db, report_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    await db.commit()
    return JSONResponse(
        content=report.data,
        headers={"Content-Disposition": f'attachment; filename="{report.file_name}"'},
    )
