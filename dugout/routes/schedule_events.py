# dugout/routes/schedule_events.py

import logging
from datetime import date
from typing import Iterable, List, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
from dugout.crud import (
    create_scoped,
    hard_delete,
    ok,
    paginate,
    serialize,
    serialize_many,
    update_scoped,
)
from dugout.database import get_db
from dugout.errors import NotFoundError
from dugout.models.location import Location
from dugout.models.schedule_event import ScheduleEvent, ScheduleEventDate
from dugout.models.schedule_template import ScheduleTemplate
from dugout.models.user_permission import PermissionType
from dugout.permissions import require_permission
from dugout.schemas import (
    EventDateCreate,
    EventType,
    ScheduleEventCreate,
    ScheduleEventRead,
    ScheduleEventUpdate,
)
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, get_scoped_or_none, scoped_select

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Schedule events"])

can_create = require_permission(PermissionType.schedule_create)
can_edit = require_permission(PermissionType.schedule_edit)
can_delete = require_permission(PermissionType.schedule_delete)


async def _check_template(db: AsyncSession, template_id: int, team_id: int) -> None:
    if await get_scoped_or_none(db, ScheduleTemplate, template_id, team_id=team_id) is None:
        raise NotFoundError("Schedule template not found or does not belong to your team")


async def _check_locations(db: AsyncSession, location_ids: Iterable[Optional[int]], team_id: int) -> None:
    wanted = {pk for pk in location_ids if pk is not None}
    if not wanted:
        return
    found = set(
        (
            await db.execute(select(Location.id).where(Location.team_id == team_id, Location.id.in_(wanted)))
        ).scalars()
    )
    if wanted - found:
        raise NotFoundError("Location not found or does not belong to your team")


def _build_dates(entries: List[EventDateCreate], principal: Principal) -> List[ScheduleEventDate]:
    return [
        ScheduleEventDate(
            **entry.model_dump(exclude_none=True),
            team_id=principal.team_id,
            created_by=principal.id,
        )
        for entry in entries
    ]


@router.get("")
async def list_events(
    schedule_template_id: Optional[int] = Query(None, ge=1),
    event_type: Optional[EventType] = None,
    location_id: Optional[int] = Query(None, ge=1),
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(ScheduleEvent, user.team_id)
    if schedule_template_id:
        stmt = stmt.where(ScheduleEvent.schedule_template_id == schedule_template_id)
    if event_type:
        stmt = stmt.where(ScheduleEvent.event_type == event_type)
    if location_id:
        stmt = stmt.where(ScheduleEvent.location_id == location_id)
    if start_date is not None or end_date is not None:
        # events with at least one occurrence in the window
        occurrences = select(ScheduleEventDate.schedule_event_id).where(
            ScheduleEventDate.team_id == user.team_id
        )
        if start_date is not None:
            occurrences = occurrences.where(ScheduleEventDate.event_date >= start_date)
        if end_date is not None:
            occurrences = occurrences.where(ScheduleEventDate.event_date <= end_date)
        stmt = stmt.where(ScheduleEvent.id.in_(occurrences))

    events, meta = await paginate(
        db, stmt, page, order_by=(ScheduleEvent.created_at.desc(), ScheduleEvent.id.desc())
    )
    return ok(serialize_many(ScheduleEventRead, events), pagination=meta)


@router.get("/{event_id}")
async def get_event(
    event_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    event = await get_scoped(db, ScheduleEvent, event_id, team_id=user.team_id)
    return ok(serialize(ScheduleEventRead, event))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    payload: ScheduleEventCreate,
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    await _check_template(db, payload.schedule_template_id, user.team_id)
    await _check_locations(
        db,
        [payload.location_id] + [entry.location_id_override for entry in payload.event_dates],
        user.team_id,
    )

    values = payload.model_dump(exclude_none=True, exclude={"event_dates"})
    values["dates"] = _build_dates(payload.event_dates, user)
    event = await create_scoped(db, ScheduleEvent, values, user, failure_message="Error creating schedule event")
    logger.info("User %s created schedule event %s with %d date(s)", user.id, event.id, len(event.dates))
    return ok(serialize(ScheduleEventRead, event), message="Schedule event created successfully")


@router.put("/{event_id}")
async def update_event(
    payload: ScheduleEventUpdate,
    event_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    event = await get_scoped(db, ScheduleEvent, event_id, team_id=user.team_id)
    changes = payload.model_dump(exclude_unset=True, exclude={"event_dates"})

    if "schedule_template_id" in changes:
        await _check_template(db, changes["schedule_template_id"], user.team_id)
    location_ids = [changes.get("location_id")]
    if payload.event_dates is not None:
        location_ids += [entry.location_id_override for entry in payload.event_dates]
    await _check_locations(db, location_ids, user.team_id)

    if payload.event_dates is not None:
        # old occurrences must be deleted before the same dates are inserted again
        event.dates.clear()
        await db.flush()
        changes["dates"] = _build_dates(payload.event_dates, user)
    event = await update_scoped(db, event, changes, failure_message="Error updating schedule event")
    return ok(serialize(ScheduleEventRead, event), message="Schedule event updated successfully")


@router.delete("/{event_id}")
async def delete_event(
    event_id: int = Path(ge=1),
    user: Principal = Depends(can_delete),
    db: AsyncSession = Depends(get_db),
):
    event = await get_scoped(db, ScheduleEvent, event_id, team_id=user.team_id)
    await hard_delete(db, event, failure_message="Error deleting schedule event")
    return ok(message="Schedule event deleted successfully")
