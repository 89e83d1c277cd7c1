# dugout/routes/scouts.py

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
from dugout.models.scout import Scout
from dugout.schemas import ScoutCreate, ScoutPosition, ScoutRead, ScoutUpdate
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Scouts"])

SEARCH_COLUMNS = (
    Scout.first_name,
    Scout.last_name,
    Scout.organization_name,
    Scout.email,
    Scout.coverage_area,
    Scout.specialization,
)


@router.get("")
async def list_scouts(
    search: Optional[str] = Query(None, max_length=100),
    scout_status: Literal["active", "inactive"] = Query("active", alias="status"),
    position: Optional[ScoutPosition] = None,
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(Scout, user.team_id).where(Scout.status == scout_status)
    stmt = apply_search(stmt, SEARCH_COLUMNS, search)
    if position:
        stmt = stmt.where(Scout.position == position)

    scouts, meta = await paginate(db, stmt, page, order_by=(Scout.created_at.desc(), Scout.id.desc()))
    return ok(serialize_many(ScoutRead, scouts), pagination=meta)


@router.get("/{scout_id}")
async def get_scout(
    scout_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    scout = await get_scoped(db, Scout, scout_id, team_id=user.team_id)
    return ok(serialize(ScoutRead, scout))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_scout(
    payload: ScoutCreate,
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    scout = await create_scoped(
        db, Scout, payload.model_dump(exclude_none=True), user, failure_message="Error creating scout"
    )
    return ok(serialize(ScoutRead, scout), message="Scout created successfully")


@router.put("/{scout_id}")
async def update_scout(
    payload: ScoutUpdate,
    scout_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    scout = await get_scoped(db, Scout, scout_id, team_id=user.team_id)
    scout = await update_scoped(
        db, scout, payload.model_dump(exclude_unset=True), failure_message="Error updating scout"
    )
    return ok(serialize(ScoutRead, scout), message="Scout updated successfully")


@router.delete("/{scout_id}")
async def delete_scout(
    scout_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    scout = await get_scoped(db, Scout, scout_id, team_id=user.team_id)
    await hard_delete(db, scout, failure_message="Error deleting scout")
    return ok(message="Scout deleted successfully")
