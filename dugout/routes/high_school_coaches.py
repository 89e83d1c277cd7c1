# dugout/routes/high_school_coaches.py

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
from dugout.models.high_school_coach import HighSchoolCoach
from dugout.schemas import (
    HighSchoolCoachCreate,
    HighSchoolCoachPosition,
    HighSchoolCoachRead,
    HighSchoolCoachUpdate,
    RelationshipType,
)
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["High school coaches"])

SEARCH_COLUMNS = (
    HighSchoolCoach.first_name,
    HighSchoolCoach.last_name,
    HighSchoolCoach.school_name,
    HighSchoolCoach.school_district,
    HighSchoolCoach.email,
    HighSchoolCoach.city,
)


@router.get("")
async def list_high_school_coaches(
    search: Optional[str] = Query(None, max_length=100),
    state: Optional[str] = Query(None, max_length=50),
    position: Optional[HighSchoolCoachPosition] = None,
    relationship_type: Optional[RelationshipType] = None,
    coach_status: Literal["active", "inactive"] = Query("active", alias="status"),
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(HighSchoolCoach, user.team_id).where(HighSchoolCoach.status == coach_status)
    stmt = apply_search(stmt, SEARCH_COLUMNS, search)
    if state:
        stmt = stmt.where(HighSchoolCoach.state == state)
    if position:
        stmt = stmt.where(HighSchoolCoach.position == position)
    if relationship_type:
        stmt = stmt.where(HighSchoolCoach.relationship_type == relationship_type)

    coaches, meta = await paginate(
        db, stmt, page, order_by=(HighSchoolCoach.created_at.desc(), HighSchoolCoach.id.desc())
    )
    return ok(serialize_many(HighSchoolCoachRead, coaches), pagination=meta)


@router.get("/{coach_id}")
async def get_high_school_coach(
    coach_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await get_scoped(db, HighSchoolCoach, coach_id, team_id=user.team_id)
    return ok(serialize(HighSchoolCoachRead, coach))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_high_school_coach(
    payload: HighSchoolCoachCreate,
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await create_scoped(
        db,
        HighSchoolCoach,
        payload.model_dump(exclude_none=True),
        user,
        failure_message="Error creating high school coach",
    )
    return ok(serialize(HighSchoolCoachRead, coach), message="High school coach created successfully")


@router.put("/{coach_id}")
async def update_high_school_coach(
    payload: HighSchoolCoachUpdate,
    coach_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await get_scoped(db, HighSchoolCoach, coach_id, team_id=user.team_id)
    coach = await update_scoped(
        db, coach, payload.model_dump(exclude_unset=True), failure_message="Error updating high school coach"
    )
    return ok(serialize(HighSchoolCoachRead, coach), message="High school coach updated successfully")


@router.delete("/{coach_id}")
async def delete_high_school_coach(
    coach_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    coach = await get_scoped(db, HighSchoolCoach, coach_id, team_id=user.team_id)
    await hard_delete(db, coach, failure_message="Error deleting high school coach")
    return ok(message="High school coach deleted successfully")
