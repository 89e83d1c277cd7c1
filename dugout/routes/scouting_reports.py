# dugout/routes/scouting_reports.py

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
from dugout.crud import commit_or_fail, ok, paginate, reload, serialize, serialize_many
from dugout.database import get_db
from dugout.errors import ApiError
from dugout.models.player import Player
from dugout.models.scouting_report import ScoutingReport
from dugout.models.user_permission import PermissionType
from dugout.permissions import require_permission
from dugout.schemas import ScoutingReportCreate, ScoutingReportRead, ScoutingReportUpdate
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, get_scoped_scouting_report, scouting_reports_select

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Scouting Reports"])

can_create = require_permission(PermissionType.reports_create)
can_edit = require_permission(PermissionType.reports_edit)


@router.get("")
async def list_scouting_reports(
    player_id: Optional[int] = Query(None, ge=1),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scouting_reports_select(user.team_id)
    if player_id:
        stmt = stmt.where(ScoutingReport.player_id == player_id)
    if start_date:
        stmt = stmt.where(ScoutingReport.report_date >= start_date)
    if end_date:
        stmt = stmt.where(ScoutingReport.report_date <= end_date)

    reports, meta = await paginate(
        db, stmt, page, order_by=(ScoutingReport.report_date.desc(), ScoutingReport.id.desc())
    )
    return ok(serialize_many(ScoutingReportRead, reports), pagination=meta)


@router.get("/{report_id}")
async def get_scouting_report(
    report_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    report = await get_scoped_scouting_report(db, report_id, team_id=user.team_id)
    return ok(serialize(ScoutingReportRead, report))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_scouting_report(
    payload: ScoutingReportCreate,
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    # Reports carry no team_id; the player must be ours.
    await get_scoped(db, Player, payload.player_id, team_id=user.team_id, message="Player not found")

    report = ScoutingReport(**payload.model_dump(exclude_none=True), created_by=user.id)
    try:
        db.add(report)
        await db.flush()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Error creating scouting report")
        raise ApiError(500, "Error creating scouting report")
    await commit_or_fail(db, "Error creating scouting report")

    report = await reload(db, ScoutingReport, report.id)
    return ok(serialize(ScoutingReportRead, report), message="Scouting report created successfully")


@router.put("/{report_id}")
async def update_scouting_report(
    payload: ScoutingReportUpdate,
    report_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    report = await get_scoped_scouting_report(db, report_id, team_id=user.team_id)
    changes = payload.model_dump(exclude_unset=True)

    new_player = changes.get("player_id")
    if new_player is not None and new_player != report.player_id:
        await get_scoped(db, Player, new_player, team_id=user.team_id, message="Player not found")

    for key, value in changes.items():
        setattr(report, key, value)
    await commit_or_fail(db, "Error updating scouting report")

    report = await reload(db, ScoutingReport, report.id)
    return ok(serialize(ScoutingReportRead, report), message="Scouting report updated successfully")
