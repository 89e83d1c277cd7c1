# dugout/routes/reports.py

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal
from dugout.crud import (
    apply_search,
    create_scoped,
    ok,
    paginate,
    serialize,
    serialize_many,
    soft_delete,
    update_scoped,
)
from dugout.database import get_db
from dugout.models.report import Report
from dugout.models.user_permission import PermissionType
from dugout.permissions import require_permission
from dugout.schemas import ReportCreate, ReportRead, ReportStatus, ReportType, ReportUpdate
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Reports"])

can_view = require_permission(PermissionType.reports_view)
can_create = require_permission(PermissionType.reports_create)
can_edit = require_permission(PermissionType.reports_edit)
can_delete = require_permission(PermissionType.reports_delete)


@router.get("")
async def list_reports(
    search: Optional[str] = Query(None, max_length=100),
    report_type: Optional[ReportType] = Query(None, alias="type"),
    report_status: Optional[ReportStatus] = Query(None, alias="status"),
    page: Page = Depends(pagination),
    user: Principal = Depends(can_view),
    db: AsyncSession = Depends(get_db),
):
    stmt = apply_search(scoped_select(Report, user.team_id), (Report.title, Report.description), search)
    if report_type:
        stmt = stmt.where(Report.type == report_type)
    if report_status:
        stmt = stmt.where(Report.status == report_status)

    reports, meta = await paginate(db, stmt, page, order_by=(Report.created_at.desc(), Report.id.desc()))
    return ok(serialize_many(ReportRead, reports), pagination=meta)


@router.get("/{report_id}")
async def get_report(
    report_id: int = Path(ge=1),
    user: Principal = Depends(can_view),
    db: AsyncSession = Depends(get_db),
):
    report = await get_scoped(db, Report, report_id, team_id=user.team_id)
    return ok(serialize(ReportRead, report))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_report(
    payload: ReportCreate,
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    report = await create_scoped(
        db, Report, payload.model_dump(exclude_none=True), user, failure_message="Error creating report"
    )
    return ok(serialize(ReportRead, report), message="Report created successfully")


@router.put("/{report_id}")
async def update_report(
    payload: ReportUpdate,
    report_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    report = await get_scoped(db, Report, report_id, team_id=user.team_id)
    report = await update_scoped(
        db, report, payload.model_dump(exclude_unset=True), failure_message="Error updating report"
    )
    return ok(serialize(ReportRead, report), message="Report updated successfully")


@router.delete("/{report_id}")
async def delete_report(
    report_id: int = Path(ge=1),
    user: Principal = Depends(can_delete),
    db: AsyncSession = Depends(get_db),
):
    report = await get_scoped(db, Report, report_id, team_id=user.team_id)
    await soft_delete(db, report, failure_message="Error deleting report")
    return ok(message="Report deleted successfully")
