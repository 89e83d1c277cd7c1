# dugout/routes/depth_charts.py

import logging

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal
from dugout.crud import (
    clear_default,
    commit_or_fail,
    ok,
    reload,
    serialize,
    serialize_many,
    soft_delete,
    update_scoped,
)
from dugout.database import get_db
from dugout.errors import ApiError, BadRequestError, NotFoundError
from dugout.models.depth_chart import DepthChart, DepthChartPlayer, DepthChartPosition
from dugout.models.player import Player
from dugout.models.user_permission import PermissionType
from dugout.permissions import require_permission
from dugout.recommendations import MAX_REASONS, recommend
from dugout.schemas import (
    AssignmentCreate,
    AssignmentRead,
    DepthChartCreate,
    DepthChartRead,
    DepthChartSummary,
    DepthChartUpdate,
    PlayerCard,
    PositionCreate,
    PositionRead,
    PositionUpdate,
)
from dugout.tenancy import get_scoped, get_scoped_assignment, get_scoped_position

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Depth charts"])

can_view = require_permission(PermissionType.depth_chart_view)
can_create = require_permission(PermissionType.depth_chart_create)
can_edit = require_permission(PermissionType.depth_chart_edit)
can_delete = require_permission(PermissionType.depth_chart_delete)
can_manage_positions = require_permission(PermissionType.depth_chart_manage_positions)
can_assign = require_permission(PermissionType.player_assign)
can_unassign = require_permission(PermissionType.player_unassign)

DEFAULT_POSITIONS = (
    {"position_code": "P", "position_name": "Pitcher", "color": "#EF4444", "icon": "Shield", "sort_order": 1},
    {"position_code": "C", "position_name": "Catcher", "color": "#3B82F6", "icon": "Shield", "sort_order": 2},
    {"position_code": "1B", "position_name": "First Base", "color": "#10B981", "icon": "Target", "sort_order": 3},
    {"position_code": "2B", "position_name": "Second Base", "color": "#F59E0B", "icon": "Target", "sort_order": 4},
    {"position_code": "3B", "position_name": "Third Base", "color": "#8B5CF6", "icon": "Target", "sort_order": 5},
    {"position_code": "SS", "position_name": "Shortstop", "color": "#6366F1", "icon": "Target", "sort_order": 6},
    {"position_code": "LF", "position_name": "Left Field", "color": "#EC4899", "icon": "Zap", "sort_order": 7},
    {"position_code": "CF", "position_name": "Center Field", "color": "#14B8A6", "icon": "Zap", "sort_order": 8},
    {"position_code": "RF", "position_name": "Right Field", "color": "#F97316", "icon": "Zap", "sort_order": 9},
    {"position_code": "DH", "position_name": "Designated Hitter", "color": "#06B6D4", "icon": "Heart", "sort_order": 10},
)

_POSITION_COPY_FIELDS = (
    "position_code",
    "position_name",
    "color",
    "icon",
    "sort_order",
    "max_players",
    "description",
)


async def _get_chart(db: AsyncSession, chart_id: int, user: Principal) -> DepthChart:
    return await get_scoped(db, DepthChart, chart_id, team_id=user.team_id)


async def _assigned_player_ids(db: AsyncSession, chart_id: int) -> list:
    result = await db.execute(
        select(DepthChartPlayer.player_id).where(
            DepthChartPlayer.depth_chart_id == chart_id,
            DepthChartPlayer.is_active.is_(True),
        )
    )
    return list(result.scalars().all())


async def _unassigned_players(db: AsyncSession, chart: DepthChart, *, order_by=()):
    stmt = select(Player).where(
        Player.team_id == chart.team_id,
        Player.is_active.is_(True),
        Player.status == "active",
    )
    assigned = await _assigned_player_ids(db, chart.id)
    if assigned:
        stmt = stmt.where(Player.id.notin_(assigned))
    if order_by:
        stmt = stmt.order_by(*order_by)
    return (await db.execute(stmt)).scalars().all()


# -------------------------------------------------------------------
# Charts
# -------------------------------------------------------------------

@router.get("")
async def list_depth_charts(
    user: Principal = Depends(can_view),
    db: AsyncSession = Depends(get_db),
):
    charts = (
        await db.execute(
            select(DepthChart)
            .where(DepthChart.team_id == user.team_id, DepthChart.is_active.is_(True))
            .order_by(DepthChart.is_default.desc(), DepthChart.created_at.desc(), DepthChart.id.desc())
        )
    ).scalars().all()
    return ok(serialize_many(DepthChartSummary, charts))


@router.get("/byId/{chart_id}")
async def get_depth_chart(
    chart_id: int = Path(ge=1),
    user: Principal = Depends(can_view),
    db: AsyncSession = Depends(get_db),
):
    chart = await _get_chart(db, chart_id, user)
    return ok(serialize(DepthChartRead, chart))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_depth_chart(
    payload: DepthChartCreate,
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    values = payload.model_dump(exclude={"positions"}, exclude_none=True)
    try:
        if payload.is_default:
            await clear_default(db, DepthChart, user.team_id)
        chart = DepthChart(**values, team_id=user.team_id, created_by=user.id, version=1)
        db.add(chart)
        await db.flush()

        if payload.positions is not None:
            specs = [p.model_dump() for p in payload.positions] or [dict(p) for p in DEFAULT_POSITIONS]
            db.add_all([DepthChartPosition(depth_chart_id=chart.id, **spec) for spec in specs])
            await db.flush()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Error creating depth chart")
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error creating depth chart")

    await commit_or_fail(db, "Error creating depth chart")
    chart = await reload(db, DepthChart, chart.id)
    return ok(serialize(DepthChartRead, chart), message="Depth chart created successfully")


@router.put("/byId/{chart_id}")
async def update_depth_chart(
    payload: DepthChartUpdate,
    chart_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    chart = await _get_chart(db, chart_id, user)
    chart = await update_scoped(
        db,
        chart,
        payload.model_dump(exclude_unset=True),
        failure_message="Error updating depth chart",
        exclusive_default=True,
        bump_version=True,
    )
    return ok(serialize(DepthChartRead, chart), message="Depth chart updated successfully")


@router.delete("/byId/{chart_id}")
async def delete_depth_chart(
    chart_id: int = Path(ge=1),
    user: Principal = Depends(can_delete),
    db: AsyncSession = Depends(get_db),
):
    chart = await _get_chart(db, chart_id, user)
    await soft_delete(db, chart, failure_message="Error deleting depth chart")
    return ok(message="Depth chart deleted successfully")


@router.post("/{chart_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_depth_chart(
    chart_id: int = Path(ge=1),
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    """Copy the chart and its active positions. Player assignments are never copied."""

    original = await _get_chart(db, chart_id, user)
    positions = [p for p in original.positions if p.is_active]
    try:
        copy = DepthChart(
            name=f"{original.name} (Copy)",
            description=original.description,
            team_id=user.team_id,
            created_by=user.id,
            is_default=False,
            is_active=True,
            version=1,
            effective_date=None,
            notes=f"Duplicated from {original.name}",
        )
        db.add(copy)
        await db.flush()
        db.add_all([
            DepthChartPosition(
                depth_chart_id=copy.id,
                is_active=True,
                **{field: getattr(position, field) for field in _POSITION_COPY_FIELDS},
            )
            for position in positions
        ])
        await db.flush()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Error duplicating depth chart %s", chart_id)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, "Error duplicating depth chart")

    await commit_or_fail(db, "Error duplicating depth chart")
    copy = await reload(db, DepthChart, copy.id)
    return ok(serialize(DepthChartRead, copy), message="Depth chart duplicated successfully")


@router.get("/{chart_id}/history")
async def depth_chart_history(
    chart_id: int = Path(ge=1),
    user: Principal = Depends(can_view),
    db: AsyncSession = Depends(get_db),
):
    # history is still readable after a soft delete
    chart = await get_scoped(db, DepthChart, chart_id, team_id=user.team_id, active_only=False)
    creator = (
        {"id": chart.creator.id, "first_name": chart.creator.first_name, "last_name": chart.creator.last_name}
        if chart.creator else {"id": chart.created_by}
    )

    entries = [{
        "id": 1,
        "action": "Created",
        "description": f'Depth chart "{chart.name}" was created',
        "created_at": chart.created_at.isoformat() if chart.created_at else None,
        "user": creator,
    }]
    if chart.version > 1:
        entries.append({
            "id": 2,
            "action": "Updated",
            "description": f"Depth chart is at version {chart.version}",
            "created_at": chart.updated_at.isoformat() if chart.updated_at else None,
            "user": None,
        })
    if not chart.is_active:
        entries.append({
            "id": len(entries) + 1,
            "action": "Deleted",
            "description": f'Depth chart "{chart.name}" was deleted',
            "created_at": chart.updated_at.isoformat() if chart.updated_at else None,
            "user": None,
        })
    return ok(entries)


# -------------------------------------------------------------------
# Positions
# -------------------------------------------------------------------

@router.post("/{chart_id}/positions", status_code=status.HTTP_201_CREATED)
async def add_position(
    payload: PositionCreate,
    chart_id: int = Path(ge=1),
    user: Principal = Depends(can_manage_positions),
    db: AsyncSession = Depends(get_db),
):
    chart = await _get_chart(db, chart_id, user)
    position = DepthChartPosition(depth_chart_id=chart.id, **payload.model_dump())
    db.add(position)
    await commit_or_fail(db, "Error adding position")
    position = await reload(db, DepthChartPosition, position.id)
    return ok(serialize(PositionRead, position), message="Position added successfully")


@router.put("/positions/{position_id}")
async def update_position(
    payload: PositionUpdate,
    position_id: int = Path(ge=1),
    user: Principal = Depends(can_manage_positions),
    db: AsyncSession = Depends(get_db),
):
    position = await get_scoped_position(db, position_id, team_id=user.team_id)
    for key, value in payload.model_dump(exclude_unset=True).items():
        setattr(position, key, value)
    await commit_or_fail(db, "Error updating position")
    position = await reload(db, DepthChartPosition, position.id)
    return ok(serialize(PositionRead, position), message="Position updated successfully")


@router.delete("/positions/{position_id}")
async def delete_position(
    position_id: int = Path(ge=1),
    user: Principal = Depends(can_manage_positions),
    db: AsyncSession = Depends(get_db),
):
    position = await get_scoped_position(db, position_id, team_id=user.team_id)
    await soft_delete(db, position, failure_message="Error deleting position")
    return ok(message="Position deleted successfully")


# -------------------------------------------------------------------
# Player assignments
# -------------------------------------------------------------------

@router.post("/positions/{position_id}/players", status_code=status.HTTP_201_CREATED)
async def assign_player(
    payload: AssignmentCreate,
    position_id: int = Path(ge=1),
    user: Principal = Depends(can_assign),
    db: AsyncSession = Depends(get_db),
):
    position = await get_scoped_position(db, position_id, team_id=user.team_id)

    player = (
        await db.execute(
            select(Player.id).where(
                Player.id == payload.player_id,
                Player.team_id == user.team_id,
                Player.is_active.is_(True),
            )
        )
    ).scalar_one_or_none()
    if player is None:
        raise NotFoundError("Player not found")

    existing = (
        await db.execute(
            select(DepthChartPlayer.id).where(
                DepthChartPlayer.depth_chart_id == position.depth_chart_id,
                DepthChartPlayer.position_id == position.id,
                DepthChartPlayer.player_id == payload.player_id,
                DepthChartPlayer.is_active.is_(True),
            )
        )
    ).scalar_one_or_none()
    if existing is not None:
        raise BadRequestError("Player is already assigned to this position")

    assignment = DepthChartPlayer(
        depth_chart_id=position.depth_chart_id,
        position_id=position.id,
        player_id=payload.player_id,
        depth_order=payload.depth_order,
        notes=payload.notes,
        assigned_by=user.id,
    )
    db.add(assignment)
    await commit_or_fail(db, "Error assigning player")
    assignment = await reload(db, DepthChartPlayer, assignment.id)
    return ok(serialize(AssignmentRead, assignment), message="Player assigned successfully")


@router.delete("/players/{assignment_id}")
async def unassign_player(
    assignment_id: int = Path(ge=1),
    user: Principal = Depends(can_unassign),
    db: AsyncSession = Depends(get_db),
):
    assignment = await get_scoped_assignment(db, assignment_id, team_id=user.team_id)
    await soft_delete(db, assignment, failure_message="Error removing player assignment")
    return ok(message="Player assignment removed successfully")


@router.get("/{chart_id}/available-players")
async def available_players(
    chart_id: int = Path(ge=1),
    user: Principal = Depends(can_assign),
    db: AsyncSession = Depends(get_db),
):
    chart = await _get_chart(db, chart_id, user)
    players = await _unassigned_players(
        db, chart, order_by=(Player.first_name.asc(), Player.last_name.asc())
    )
    return ok(serialize_many(PlayerCard, players))


@router.get("/{chart_id}/recommended-players/{position_id}")
async def recommended_players(
    chart_id: int = Path(ge=1),
    position_id: int = Path(ge=1),
    user: Principal = Depends(can_assign),
    db: AsyncSession = Depends(get_db),
):
    chart = await _get_chart(db, chart_id, user)
    position = await get_scoped_position(db, position_id, team_id=user.team_id)
    if position.depth_chart_id != chart.id:
        raise NotFoundError("Position not found")

    players = await _unassigned_players(db, chart, order_by=(Player.id.asc(),))
    data = []
    for player, score in recommend(players, position.position_code):
        entry = serialize(PlayerCard, player)
        entry["score"] = score.points
        entry["reasons"] = score.reasons[:MAX_REASONS]
        data.append(entry)
    return ok(data)
