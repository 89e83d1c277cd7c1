# dugout/routes/vendors.py

from typing import Optional

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
from dugout.models.vendor import Vendor
from dugout.schemas import VendorCreate, VendorRead, VendorStatus, VendorType, VendorUpdate
from dugout.sorting import Page, Sort, pagination, sort_params
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Vendors"])

SEARCH_COLUMNS = (Vendor.company_name, Vendor.contact_person, Vendor.services_provided, Vendor.email)


@router.get("")
async def list_vendors(
    search: Optional[str] = Query(None, max_length=100),
    vendor_type: Optional[VendorType] = None,
    vendor_status: VendorStatus = Query("active", alias="status"),
    page: Page = Depends(pagination),
    sort: Sort = Depends(sort_params("vendors")),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(Vendor, user.team_id).where(Vendor.status == vendor_status)
    stmt = apply_search(stmt, SEARCH_COLUMNS, search)
    if vendor_type:
        stmt = stmt.where(Vendor.vendor_type == vendor_type)

    vendors, meta = await paginate(db, sort.apply(stmt, Vendor), page)
    return ok(serialize_many(VendorRead, vendors), pagination=meta)


@router.get("/{vendor_id}")
async def get_vendor(
    vendor_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    vendor = await get_scoped(db, Vendor, vendor_id, team_id=user.team_id)
    return ok(serialize(VendorRead, vendor))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_vendor(
    payload: VendorCreate,
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    vendor = await create_scoped(
        db, Vendor, payload.model_dump(exclude_none=True), user, failure_message="Error creating vendor"
    )
    return ok(serialize(VendorRead, vendor), message="Vendor created successfully")


@router.put("/{vendor_id}")
async def update_vendor(
    payload: VendorUpdate,
    vendor_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    vendor = await get_scoped(db, Vendor, vendor_id, team_id=user.team_id)
    vendor = await update_scoped(
        db, vendor, payload.model_dump(exclude_unset=True), failure_message="Error updating vendor"
    )
    return ok(serialize(VendorRead, vendor), message="Vendor updated successfully")


@router.delete("/{vendor_id}")
async def delete_vendor(
    vendor_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    vendor = await get_scoped(db, Vendor, vendor_id, team_id=user.team_id)
    await hard_delete(db, vendor, failure_message="Error deleting vendor")
    return ok(message="Vendor deleted successfully")
