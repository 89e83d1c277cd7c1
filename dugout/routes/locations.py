# dugout/routes/locations.py

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
from dugout.crud import (
    apply_search,
    create_scoped,
    hard_delete,
    ok,
    paginate,
    serialize,
    serialize_many,
    update_scoped,
)
from dugout.database import get_db
from dugout.errors import BadRequestError
from dugout.models.location import Location
from dugout.models.schedule_event import ScheduleEvent, ScheduleEventDate
from dugout.models.user_permission import PermissionType
from dugout.permissions import require_permission
from dugout.schemas import LocationCreate, LocationRead, LocationType, LocationUpdate
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Locations"])

can_create = require_permission(PermissionType.schedule_create)
can_edit = require_permission(PermissionType.schedule_edit)
can_delete = require_permission(PermissionType.schedule_delete)

DUPLICATE_NAME = "A location with this name already exists for your team"


async def _ensure_unique_name(db: AsyncSession, team_id: int, name: str, exclude_id: Optional[int] = None):
    stmt = select(Location.id).where(Location.team_id == team_id, Location.name == name)
    if exclude_id is not None:
        stmt = stmt.where(Location.id != exclude_id)
    if (await db.execute(stmt)).scalar_one_or_none() is not None:
        raise BadRequestError(DUPLICATE_NAME)


@router.get("")
async def list_locations(
    search: Optional[str] = Query(None, max_length=100),
    location_type: Optional[LocationType] = None,
    is_active: Optional[bool] = None,
    is_home_venue: Optional[bool] = None,
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    # is_active is an availability flag here, so inactive venues are listed unless filtered out
    stmt = scoped_select(Location, user.team_id, active_only=False)
    stmt = apply_search(stmt, (Location.name, Location.address, Location.city), search)
    if location_type:
        stmt = stmt.where(Location.location_type == location_type)
    if is_active is not None:
        stmt = stmt.where(Location.is_active.is_(is_active))
    if is_home_venue is not None:
        stmt = stmt.where(Location.is_home_venue.is_(is_home_venue))

    locations, meta = await paginate(db, stmt, page, order_by=(Location.name.asc(), Location.id.asc()))
    return ok(serialize_many(LocationRead, locations), pagination=meta)


@router.get("/{location_id}")
async def get_location(
    location_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    location = await get_scoped(db, Location, location_id, team_id=user.team_id, active_only=False)
    return ok(serialize(LocationRead, location))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_location(
    payload: LocationCreate,
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    await _ensure_unique_name(db, user.team_id, payload.name)
    location = await create_scoped(
        db, Location, payload.model_dump(exclude_none=True), user, failure_message="Error creating location"
    )
    return ok(serialize(LocationRead, location), message="Location created successfully")


@router.put("/{location_id}")
async def update_location(
    payload: LocationUpdate,
    location_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    location = await get_scoped(db, Location, location_id, team_id=user.team_id, active_only=False)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes and changes["name"] != location.name:
        await _ensure_unique_name(db, user.team_id, changes["name"], exclude_id=location.id)
    location = await update_scoped(db, location, changes, failure_message="Error updating location")
    return ok(serialize(LocationRead, location), message="Location updated successfully")


@router.delete("/{location_id}")
async def delete_location(
    location_id: int = Path(ge=1),
    user: Principal = Depends(can_delete),
    db: AsyncSession = Depends(get_db),
):
    location = await get_scoped(db, Location, location_id, team_id=user.team_id, active_only=False)

    overrides = select(ScheduleEventDate.schedule_event_id).where(
        ScheduleEventDate.location_id_override == location.id
    )
    in_use = (
        await db.execute(
            select(func.count(ScheduleEvent.id)).where(
                ScheduleEvent.team_id == user.team_id,
                or_(ScheduleEvent.location_id == location.id, ScheduleEvent.id.in_(overrides)),
            )
        )
    ).scalar_one()
    if in_use:
        raise BadRequestError(
            f"Cannot delete location. It is being used in {in_use} schedule event(s). "
            "Please remove or change the location in those events first."
        )

    await hard_delete(db, location, failure_message="Error deleting location")
    return ok(message="Location deleted successfully")
