# dugout/routes/games.py

from datetime import date
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy import case, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal, get_current_user
from dugout.crud import create_scoped, hard_delete, ok, paginate, serialize, serialize_many, update_scoped
from dugout.database import get_db
from dugout.models.game import Game
from dugout.schemas import GameCreate, GameRead, GameUpdate
from dugout.sorting import Page, Sort, pagination, sort_params
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Games"])


@router.get("")
async def list_games(
    season: Optional[str] = Query(None, max_length=20),
    result: Optional[Literal["W", "L", "T"]] = None,
    page: Page = Depends(pagination),
    sort: Sort = Depends(sort_params("games")),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(Game, user.team_id)
    if season:
        stmt = stmt.where(Game.season == season)
    if result:
        stmt = stmt.where(Game.result == result)

    games, meta = await paginate(db, sort.apply(stmt, Game), page)
    return ok(serialize_many(GameRead, games), pagination=meta)


@router.get("/log")
async def game_log(
    limit: int = Query(10, ge=1, le=50),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    games = (
        await db.execute(
            scoped_select(Game, user.team_id)
            .order_by(Game.game_date.desc(), Game.id.desc())
            .limit(limit)
        )
    ).scalars().all()
    return ok(serialize_many(GameRead, games))


@router.get("/team-stats")
async def team_stats(
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    row = (
        await db.execute(
            select(
                func.count(Game.id),
                func.sum(case((Game.result == "W", 1), else_=0)),
                func.sum(case((Game.result == "L", 1), else_=0)),
                func.sum(case((Game.result == "T", 1), else_=0)),
                func.sum(func.coalesce(Game.team_score, 0)),
                func.sum(func.coalesce(Game.opponent_score, 0)),
            ).where(Game.team_id == user.team_id)
        )
    ).one()

    played = row[0] or 0
    wins, losses, ties, scored, allowed = (int(v or 0) for v in row[1:])
    return ok({
        "gamesPlayed": played,
        "wins": wins,
        "losses": losses,
        "ties": ties,
        "winRate": wins / played if played else 0,
        "totalRunsScored": scored,
        "totalRunsAllowed": allowed,
        "avgRunsScored": scored / played if played else 0,
        "avgRunsAllowed": allowed / played if played else 0,
    })


@router.get("/season-stats")
async def season_stats(
    season: Optional[str] = Query(None, max_length=20),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = (
        select(
            Game.season,
            func.count(Game.id),
            func.sum(case((Game.result == "W", 1), else_=0)),
            func.sum(case((Game.result == "L", 1), else_=0)),
            func.sum(case((Game.result == "T", 1), else_=0)),
            func.sum(func.coalesce(Game.team_score, 0)),
            func.sum(func.coalesce(Game.opponent_score, 0)),
        )
        .where(Game.team_id == user.team_id)
        .group_by(Game.season)
        .order_by(Game.season.asc().nulls_last())
    )
    if season:
        stmt = stmt.where(Game.season == season)

    seasons = []
    for row in (await db.execute(stmt)).all():
        played = row[1] or 0
        wins, losses, ties, scored, allowed = (int(v or 0) for v in row[2:])
        seasons.append({
            "season": row[0] or "Unknown",
            "gamesPlayed": played,
            "wins": wins,
            "losses": losses,
            "ties": ties,
            "winRate": wins / played if played else 0,
            "totalRunsScored": scored,
            "totalRunsAllowed": allowed,
            "avgRunsScored": scored / played if played else 0,
            "avgRunsAllowed": allowed / played if played else 0,
        })
    return ok(seasons)


@router.get("/upcoming")
async def upcoming_games(
    limit: int = Query(5, ge=1, le=20),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    games = (
        await db.execute(
            scoped_select(Game, user.team_id)
            .where(Game.game_date >= date.today())
            .order_by(Game.game_date.asc(), Game.id.asc())
            .limit(limit)
        )
    ).scalars().all()
    return ok(serialize_many(GameRead, games))


@router.get("/byId/{game_id}")
async def get_game(
    game_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    game = await get_scoped(db, Game, game_id, team_id=user.team_id)
    return ok(serialize(GameRead, game))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_game(
    payload: GameCreate,
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    game = await create_scoped(
        db, Game, payload.model_dump(exclude_none=True), user, failure_message="Error creating game"
    )
    return ok(serialize(GameRead, game), message="Game created successfully")


@router.put("/byId/{game_id}")
async def update_game(
    payload: GameUpdate,
    game_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    game = await get_scoped(db, Game, game_id, team_id=user.team_id)
    game = await update_scoped(
        db, game, payload.model_dump(exclude_unset=True), failure_message="Error updating game"
    )
    return ok(serialize(GameRead, game), message="Game updated successfully")


@router.delete("/byId/{game_id}")
async def delete_game(
    game_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    game = await get_scoped(db, Game, game_id, team_id=user.team_id)
    await hard_delete(db, game, failure_message="Error deleting game")
    return ok(message="Game deleted successfully")
