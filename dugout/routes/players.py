# dugout/routes/players.py

from datetime import timedelta
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import func, select
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
from dugout.database import get_db, utcnow
from dugout.models.player import Player
from dugout.models.scouting_report import ScoutingReport
from dugout.player_stats import derived_stats
from dugout.schemas import PlayerCreate, PlayerRead, PlayerUpdate
from dugout.sorting import Page, Sort, pagination, sort_params
from dugout.tenancy import get_scoped, scoped_select, scouting_reports_select

router = APIRouter(tags=["Players"])

SEARCH_COLUMNS = (Player.first_name, Player.last_name, Player.school, Player.city, Player.state)


@router.get("")
async def list_players(
    search: Optional[str] = Query(None, max_length=100),
    school_type: Optional[Literal["HS", "COLL"]] = None,
    position: Optional[str] = Query(None, max_length=4),
    player_status: Optional[Literal["active", "inactive", "graduated", "transferred"]] = Query(
        None, alias="status"
    ),
    page: Page = Depends(pagination),
    sort: Sort = Depends(sort_params("players")),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(Player, user.team_id)
    stmt = apply_search(stmt, SEARCH_COLUMNS, search)
    if school_type:
        stmt = stmt.where(Player.school_type == school_type)
    if position:
        stmt = stmt.where(Player.position == position)
    if player_status:
        stmt = stmt.where(Player.status == player_status)

    players, meta = await paginate(db, sort.apply(stmt, Player), page)
    return ok(serialize_many(PlayerRead, players), pagination=meta)


PERFORMANCE_SORT_COLUMNS = Literal[
    "batting_avg",
    "home_runs",
    "rbi",
    "stolen_bases",
    "era",
    "wins",
    "losses",
    "strikeouts",
    "innings_pitched",
    "first_name",
    "last_name",
    "graduation_year",
    "created_at",
]


async def _count(db: AsyncSession, stmt) -> int:
    return (await db.execute(select(func.count()).select_from(stmt.subquery()))).scalar_one()


async def _team_average(db: AsyncSession, team_id: int, column) -> Optional[float]:
    stmt = select(func.avg(column)).where(
        Player.team_id == team_id,
        Player.is_active.is_(True),
        Player.status == "active",
        column.is_not(None),
    )
    return (await db.execute(stmt)).scalar_one()


@router.get("/stats/summary")
async def stats_summary(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    active = scoped_select(Player, user.team_id).where(Player.status == "active")
    recent = scouting_reports_select(user.team_id).where(
        ScoutingReport.created_at >= utcnow() - timedelta(days=30)
    )
    team_avg = await _team_average(db, user.team_id, Player.batting_avg)

    return ok({
        "total_players": await _count(db, active),
        "active_recruits": await _count(db, active.where(Player.school_type == "HS")),
        "recent_reports": await _count(db, recent),
        "team_avg": f"{team_avg:.3f}" if team_avg is not None else ".000",
    })


@router.get("/performance")
async def player_performance(
    position: Optional[str] = Query(None, max_length=4),
    school_type: Optional[Literal["HS", "COLL"]] = None,
    player_status: Literal["active", "inactive", "graduated", "transferred"] = Query("active", alias="status"),
    sort_by: PERFORMANCE_SORT_COLUMNS = "batting_avg",
    order: Literal["ASC", "DESC"] = "DESC",
    limit: int = Query(50, ge=1, le=100),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Players ranked by one stat, with derived rate stats and a team baseline."""
    stmt = scoped_select(Player, user.team_id).where(Player.status == player_status)
    if position:
        stmt = stmt.where(Player.position == position)
    if school_type:
        stmt = stmt.where(Player.school_type == school_type)

    column = getattr(Player, sort_by)
    primary = column.desc() if order == "DESC" else column.asc()
    stmt = stmt.order_by(
        primary.nulls_last(), Player.last_name.asc(), Player.first_name.asc(), Player.id.asc()
    ).limit(limit)
    players = (await db.execute(stmt)).scalars().all()

    rows = []
    for rank, player in enumerate(players, start=1):
        row = serialize(PlayerRead, player)
        row["rank"] = rank
        row.update(derived_stats(player))
        rows.append(row)

    body = ok(rows)
    body["summary"] = {
        "total_players": len(rows),
        "team_batting_avg": await _team_average(db, user.team_id, Player.batting_avg) or 0,
        "team_era": await _team_average(db, user.team_id, Player.era) or 0,
        "filters": {
            "position": position,
            "school_type": school_type,
            "status": player_status,
            "sort_by": sort_by,
            "order": order,
        },
    }
    return body


@router.get("/{player_id}")
async def get_player(
    player_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    player = await get_scoped(db, Player, player_id, team_id=user.team_id)
    return ok(serialize(PlayerRead, player))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_player(
    payload: PlayerCreate,
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    values = payload.model_dump(exclude_none=True)
    player = await create_scoped(db, Player, values, user, failure_message="Error creating player")
    return ok(serialize(PlayerRead, player), message="Player created successfully")


@router.put("/{player_id}")
async def update_player(
    payload: PlayerUpdate,
    player_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    player = await get_scoped(db, Player, player_id, team_id=user.team_id)
    player = await update_scoped(
        db, player, payload.model_dump(exclude_unset=True), failure_message="Error updating player"
    )
    return ok(serialize(PlayerRead, player), message="Player updated successfully")


@router.delete("/{player_id}")
async def delete_player(
    player_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    player = await get_scoped(db, Player, player_id, team_id=user.team_id)
    await soft_delete(db, player, failure_message="Error deleting player")
    return ok(message="Player deleted successfully")
