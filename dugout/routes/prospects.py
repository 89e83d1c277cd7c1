# dugout/routes/prospects.py

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
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
from dugout.models.prospect import Prospect
from dugout.schemas import ProspectCreate, ProspectPosition, ProspectRead, ProspectStatus, ProspectUpdate
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Prospects"])

SEARCH_COLUMNS = (
    Prospect.first_name,
    Prospect.last_name,
    Prospect.school_name,
    Prospect.city,
    Prospect.state,
)


@router.get("")
async def list_prospects(
    search: Optional[str] = Query(None, max_length=100),
    primary_position: Optional[ProspectPosition] = None,
    prospect_status: Optional[ProspectStatus] = Query(None, alias="status"),
    school_type: Optional[str] = Query(None, max_length=12),
    graduation_year: Optional[int] = Query(None, ge=2000, le=2100),
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(Prospect, user.team_id)
    stmt = apply_search(stmt, SEARCH_COLUMNS, search)
    if primary_position:
        stmt = stmt.where(Prospect.primary_position == primary_position)
    if prospect_status:
        stmt = stmt.where(Prospect.status == prospect_status)
    if school_type:
        stmt = stmt.where(Prospect.school_type == school_type)
    if graduation_year:
        stmt = stmt.where(Prospect.graduation_year == graduation_year)

    prospects, meta = await paginate(
        db, stmt, page, order_by=(Prospect.created_at.desc(), Prospect.id.desc())
    )
    return ok(serialize_many(ProspectRead, prospects), pagination=meta)


@router.get("/{prospect_id}")
async def get_prospect(
    prospect_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    prospect = await get_scoped(db, Prospect, prospect_id, team_id=user.team_id)
    return ok(serialize(ProspectRead, prospect))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_prospect(
    payload: ProspectCreate,
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    prospect = await create_scoped(
        db,
        Prospect,
        payload.model_dump(exclude_none=True),
        user,
        failure_message="Error creating prospect",
    )
    return ok(serialize(ProspectRead, prospect), message="Prospect created successfully")


@router.put("/{prospect_id}")
async def update_prospect(
    payload: ProspectUpdate,
    prospect_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    prospect = await get_scoped(db, Prospect, prospect_id, team_id=user.team_id)
    prospect = await update_scoped(
        db, prospect, payload.model_dump(exclude_unset=True), failure_message="Error updating prospect"
    )
    return ok(serialize(ProspectRead, prospect), message="Prospect updated successfully")


@router.delete("/{prospect_id}")
async def delete_prospect(
    prospect_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    prospect = await get_scoped(db, Prospect, prospect_id, team_id=user.team_id)
    await soft_delete(db, prospect, failure_message="Error deleting prospect")
    return ok(message="Prospect deleted successfully")
