# dugout/routes/coaches.py

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Path, Query, status
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
from dugout.models.coach import Coach
from dugout.schemas import CoachCreate, CoachPosition, CoachRead, CoachUpdate
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Coaches"])

SEARCH_COLUMNS = (Coach.first_name, Coach.last_name, Coach.school_name, Coach.email)


@router.get("")
async def list_coaches(
    search: Optional[str] = Query(None, max_length=100),
    coach_status: Literal["active", "inactive"] = Query("active", alias="status"),
    position: Optional[CoachPosition] = None,
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(Coach, user.team_id).where(Coach.status == coach_status)
    stmt = apply_search(stmt, SEARCH_COLUMNS, search)
    if position:
        stmt = stmt.where(Coach.position == position)

    coaches, meta = await paginate(db, stmt, page, order_by=(Coach.created_at.desc(), Coach.id.desc()))
    return ok(serialize_many(CoachRead, coaches), pagination=meta)


@router.get("/{coach_id}")
async def get_coach(
    coach_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await get_scoped(db, Coach, coach_id, team_id=user.team_id)
    return ok(serialize(CoachRead, coach))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_coach(
    payload: CoachCreate,
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await create_scoped(
        db, Coach, payload.model_dump(exclude_none=True), user, failure_message="Error creating coach"
    )
    return ok(serialize(CoachRead, coach), message="Coach created successfully")


@router.put("/{coach_id}")
async def update_coach(
    payload: CoachUpdate,
    coach_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await get_scoped(db, Coach, coach_id, team_id=user.team_id)
    coach = await update_scoped(
        db, coach, payload.model_dump(exclude_unset=True), failure_message="Error updating coach"
    )
    return ok(serialize(CoachRead, coach), message="Coach updated successfully")


@router.delete("/{coach_id}")
async def delete_coach(
    coach_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await get_scoped(db, Coach, coach_id, team_id=user.team_id)
    await hard_delete(db, coach, failure_message="Error deleting coach")
    return ok(message="Coach deleted successfully")
