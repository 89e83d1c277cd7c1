# dugout/routes/schedules.py

from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
from dugout.crud import (
    commit_or_fail,
    create_scoped,
    hard_delete,
    ok,
    paginate,
    reload,
    serialize,
    serialize_many,
    soft_delete,
    update_scoped,
)
from dugout.database import get_db
from dugout.models.schedule import Schedule, ScheduleActivity, ScheduleSection
from dugout.models.user_permission import PermissionType
from dugout.permissions import require_permission
from dugout.schemas import (
    ActivityCreate,
    ActivityRead,
    ScheduleCreate,
    ScheduleRead,
    ScheduleUpdate,
    SectionCreate,
    SectionRead,
)
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, get_scoped_activity, get_scoped_section, scoped_select

router = APIRouter(tags=["Schedules"])

can_create = require_permission(PermissionType.schedule_create)
can_edit = require_permission(PermissionType.schedule_edit)
can_delete = require_permission(PermissionType.schedule_delete)


def _build_sections(sections: List[SectionCreate]) -> List[ScheduleSection]:
    """ORM sections in request order; sort_order follows list position."""
    built = []
    for section_order, section in enumerate(sections):
        built.append(
            ScheduleSection(
                type=section.type,
                title=section.title,
                sort_order=section_order,
                activities=[
                    ScheduleActivity(**activity.model_dump(exclude_none=True), sort_order=activity_order)
                    for activity_order, activity in enumerate(section.activities)
                ],
            )
        )
    return built


async def _activity_count(db: AsyncSession, team_id: int, since: Optional[date] = None) -> int:
    stmt = (
        select(func.count(ScheduleActivity.id))
        .join(ScheduleSection, ScheduleSection.id == ScheduleActivity.section_id)
        .join(Schedule, Schedule.id == ScheduleSection.schedule_id)
        .where(Schedule.team_id == team_id, Schedule.is_active.is_(True))
    )
    if since is not None:
        stmt = stmt.where(Schedule.date >= since)
    return (await db.execute(stmt)).scalar_one()


@router.get("")
async def list_schedules(
    schedule_date: Optional[date] = Query(None, alias="date"),
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(Schedule, user.team_id)
    if schedule_date is not None:
        stmt = stmt.where(Schedule.date == schedule_date)

    schedules, meta = await paginate(
        db, stmt, page, order_by=(Schedule.date.desc(), Schedule.created_at.desc(), Schedule.id.desc())
    )
    return ok(serialize_many(ScheduleRead, schedules), pagination=meta)


@router.get("/stats")
async def schedule_stats(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Activity counts across the team's schedules; weeks start on Sunday."""
    today = date.today()
    start_of_week = today - timedelta(days=(today.weekday() + 1) % 7)
    start_of_month = today.replace(day=1)
    return ok(
        {
            "totalEvents": await _activity_count(db, user.team_id),
            "thisWeek": await _activity_count(db, user.team_id, start_of_week),
            "thisMonth": await _activity_count(db, user.team_id, start_of_month),
        }
    )


@router.get("/byId/{schedule_id}")
async def get_schedule(
    schedule_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    schedule = await get_scoped(db, Schedule, schedule_id, team_id=user.team_id)
    return ok(serialize(ScheduleRead, schedule))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_schedule(
    payload: ScheduleCreate,
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    values = payload.model_dump(exclude_none=True, exclude={"sections"})
    values["sections"] = _build_sections(payload.sections)
    schedule = await create_scoped(db, Schedule, values, user, failure_message="Error creating schedule")
    return ok(serialize(ScheduleRead, schedule), message="Schedule created successfully")


@router.put("/byId/{schedule_id}")
async def update_schedule(
    payload: ScheduleUpdate,
    schedule_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    schedule = await get_scoped(db, Schedule, schedule_id, team_id=user.team_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"sections"})
    if payload.sections is not None:
        # orphaned sections and their activities are deleted on flush
        changes["sections"] = _build_sections(payload.sections)
    schedule = await update_scoped(db, schedule, changes, failure_message="Error updating schedule")
    return ok(serialize(ScheduleRead, schedule), message="Schedule updated successfully")


@router.delete("/byId/{schedule_id}")
async def delete_schedule(
    schedule_id: int = Path(ge=1),
    user: Principal = Depends(can_delete),
    db: AsyncSession = Depends(get_db),
):
    schedule = await get_scoped(db, Schedule, schedule_id, team_id=user.team_id)
    await soft_delete(db, schedule, failure_message="Error deleting schedule")
    return ok(message="Schedule deleted successfully")


@router.post("/{schedule_id}/sections", status_code=status.HTTP_201_CREATED)
async def add_section(
    payload: SectionCreate,
    schedule_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    schedule = await get_scoped(db, Schedule, schedule_id, team_id=user.team_id)
    last = (
        await db.execute(
            select(func.max(ScheduleSection.sort_order)).where(ScheduleSection.schedule_id == schedule.id)
        )
    ).scalar_one()

    section = _build_sections([payload])[0]
    section.schedule_id = schedule.id
    section.sort_order = 0 if last is None else last + 1
    db.add(section)
    await commit_or_fail(db, "Error adding section")
    section = await reload(db, ScheduleSection, section.id)
    return ok(serialize(SectionRead, section), message="Section added successfully")


@router.post("/sections/{section_id}/activities", status_code=status.HTTP_201_CREATED)
async def add_activity(
    payload: ActivityCreate,
    section_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    section = await get_scoped_section(db, section_id, team_id=user.team_id)
    last = (
        await db.execute(
            select(func.max(ScheduleActivity.sort_order)).where(ScheduleActivity.section_id == section.id)
        )
    ).scalar_one()

    activity = ScheduleActivity(
        **payload.model_dump(exclude_none=True),
        section_id=section.id,
        sort_order=0 if last is None else last + 1,
    )
    db.add(activity)
    await commit_or_fail(db, "Error adding activity")
    activity = await reload(db, ScheduleActivity, activity.id)
    return ok(serialize(ActivityRead, activity), message="Activity added successfully")


@router.delete("/sections/{section_id}")
async def delete_section(
    section_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    section = await get_scoped_section(db, section_id, team_id=user.team_id)
    await hard_delete(db, section, failure_message="Error deleting section")
    return ok(message="Section deleted successfully")


@router.delete("/activities/{activity_id}")
async def delete_activity(
    activity_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    activity = await get_scoped_activity(db, activity_id, team_id=user.team_id)
    await hard_delete(db, activity, failure_message="Error deleting activity")
    return ok(message="Activity deleted successfully")
