# dugout/routes/team_permissions.py
"""Grant management for the caller's own team (mounted at /teams/permissions)."""

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
from dugout.crud import commit_or_fail, hard_delete, ok, reload, serialize, serialize_many
from dugout.database import get_db
from dugout.errors import BadRequestError, NotFoundError
from dugout.models.user import User
from dugout.models.user_permission import PermissionType, UserPermission
from dugout.permissions import require_permission
from dugout.schemas import PermissionCreate, PermissionRead, PermissionUpdate
from dugout.tenancy import get_scoped

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Team permissions"])

manage_users = require_permission(PermissionType.user_management)


@router.get("")
async def list_permissions(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    grants = (
        await db.execute(
            select(UserPermission)
            .where(UserPermission.team_id == user.team_id)
            .order_by(UserPermission.created_at.desc(), UserPermission.id.desc())
        )
    ).scalars().all()
    return ok(serialize_many(PermissionRead, grants))


@router.post("", status_code=status.HTTP_201_CREATED)
async def grant_permission(
    payload: PermissionCreate,
    user: Principal = Depends(manage_users),
    db: AsyncSession = Depends(get_db),
):
    member = (
        await db.execute(
            select(User.id).where(User.id == payload.user_id, User.team_id == user.team_id)
        )
    ).scalar_one_or_none()
    if member is None:
        raise NotFoundError("User not found in team")

    duplicate = (
        await db.execute(
            select(UserPermission.id).where(
                UserPermission.user_id == payload.user_id,
                UserPermission.team_id == user.team_id,
                UserPermission.permission_type == payload.permission_type,
            )
        )
    ).scalar_one_or_none()
    if duplicate is not None:
        raise BadRequestError("Permission already exists for this user")

    grant = UserPermission(**payload.model_dump(), team_id=user.team_id, granted_by=user.id)
    db.add(grant)
    await commit_or_fail(db, "Error adding permission")
    grant = await reload(db, UserPermission, grant.id)
    logger.info(
        "User %s granted %s to user %s", user.id, payload.permission_type.value, payload.user_id
    )
    return ok(serialize(PermissionRead, grant), message="Permission added successfully")


@router.put("/{permission_id}")
async def update_permission(
    payload: PermissionUpdate,
    permission_id: int = Path(ge=1),
    user: Principal = Depends(manage_users),
    db: AsyncSession = Depends(get_db),
):
    grant = await get_scoped(
        db, UserPermission, permission_id, team_id=user.team_id, message="Permission not found"
    )
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(grant, key, value)
    await commit_or_fail(db, "Error updating permission")
    grant = await reload(db, UserPermission, grant.id)
    return ok(serialize(PermissionRead, grant), message="Permission updated successfully")


@router.delete("/{permission_id}")
async def revoke_permission(
    permission_id: int = Path(ge=1),
    user: Principal = Depends(manage_users),
    db: AsyncSession = Depends(get_db),
):
    grant = await get_scoped(
        db, UserPermission, permission_id, team_id=user.team_id, message="Permission not found"
    )
    await hard_delete(db, grant, failure_message="Error removing permission")
    logger.info("User %s revoked permission %s", user.id, permission_id)
    return ok(message="Permission removed successfully")
