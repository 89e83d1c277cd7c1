# dugout/routes/teams.py

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
from dugout.crud import commit_or_fail, ok, reload, serialize, serialize_many
from dugout.database import get_db
from dugout.errors import BadRequestError, NotFoundError
from dugout.models.team import Team
from dugout.models.user import User
from dugout.models.user_permission import PermissionType
from dugout.permissions import ROLE_HEAD_COACH, ROLE_SUPER_ADMIN, require_permission, require_roles
from dugout.schemas import (
    TeamBranding,
    TeamBrandingUpdate,
    TeamCreate,
    TeamDirectoryEntry,
    TeamMember,
    TeamRead,
    TeamUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Teams"])

require_branding_role = require_roles(
    ROLE_SUPER_ADMIN,
    ROLE_HEAD_COACH,
    message="Only super admins and head coaches can update team branding",
)


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------

async def _own_team(db: AsyncSession, user: Principal) -> Team:
    if user.team_id is None:
        raise NotFoundError("Team not found")
    team = (await db.execute(select(Team).where(Team.id == user.team_id))).scalar_one_or_none()
    if team is None:
        raise NotFoundError("Team not found")
    return team


async def _ensure_unique_name(db: AsyncSession, name: str, *, exclude_id: int = None) -> None:
    stmt = select(Team.id).where(func.lower(Team.name) == name.lower())
    if exclude_id is not None:
        stmt = stmt.where(Team.id != exclude_id)
    if (await db.execute(stmt)).scalar_one_or_none() is not None:
        raise BadRequestError("Team name already exists")


# -------------------------------------------------------------------
# Directory / creation
# -------------------------------------------------------------------

@router.get("")
async def list_teams(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Cross-team directory: public identity and colours only."""
    teams = (await db.execute(select(Team).order_by(Team.name.asc()))).scalars().all()
    return ok(serialize_many(TeamDirectoryEntry, teams))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_team(
    payload: TeamCreate,
    user: Principal = Depends(require_permission(PermissionType.team_management)),
    db: AsyncSession = Depends(get_db),
):
    await _ensure_unique_name(db, payload.name)
    team = Team(**payload.model_dump())
    db.add(team)
    await commit_or_fail(db, "Error creating team")
    team = await reload(db, Team, team.id)
    logger.info("User %s created team %s", user.id, team.id)
    return ok(serialize(TeamRead, team), message="Team created successfully")


# -------------------------------------------------------------------
# Own team
# -------------------------------------------------------------------

@router.get("/me")
async def get_my_team(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ok(serialize(TeamRead, await _own_team(db, user)))


@router.put("/me")
async def update_my_team(
    payload: TeamUpdate,
    user: Principal = Depends(require_permission(PermissionType.team_settings)),
    db: AsyncSession = Depends(get_db),
):
    team = await _own_team(db, user)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes:
        await _ensure_unique_name(db, changes["name"], exclude_id=team.id)
    for key, value in changes.items():
        setattr(team, key, value)
    await commit_or_fail(db, "Error updating team")
    team = await reload(db, Team, team.id)
    return ok(serialize(TeamRead, team), message="Team updated successfully")


@router.get("/branding")
async def get_branding(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    return ok(serialize(TeamBranding, await _own_team(db, user)))


@router.put("/branding")
async def update_branding(
    payload: TeamBrandingUpdate,
    user: Principal = Depends(require_branding_role),
    db: AsyncSession = Depends(get_db),
):
    team = await _own_team(db, user)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(team, key, value)
    await commit_or_fail(db, "Error updating team branding")
    team = await reload(db, Team, team.id)
    return ok(serialize(TeamBranding, team), message="Branding updated successfully")


@router.get("/users")
async def list_team_users(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    members = (
        await db.execute(
            select(User)
            .where(User.team_id == user.team_id)
            .order_by(User.last_name.asc(), User.first_name.asc())
        )
    ).scalars().all()
    return ok(serialize_many(TeamMember, members))
