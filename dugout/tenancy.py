"""Tenant-scoped lookups.

Every fetch by id filters on the id *and* the caller's ``team_id`` in a single
query, directly or through the parent row for child tables. A row owned by
another team is indistinguishable from a missing one: both end in 404.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from dugout.errors import NotFoundError
from dugout.models.depth_chart import DepthChart, DepthChartPlayer, DepthChartPosition
from dugout.models.player import Player
from dugout.models.schedule import Schedule, ScheduleActivity, ScheduleSection
from dugout.models.scouting_report import ScoutingReport


def scoped_select(model, team_id: int, *, active_only: bool = True) -> Select:
    """``SELECT model WHERE team_id = :team_id [AND is_active]``."""

    if not hasattr(model, "team_id"):
        raise ValueError(f"{model.__name__} has no team_id column; scope it through its parent")
    stmt = select(model).where(model.team_id == team_id)
    if active_only and hasattr(model, "is_active"):
        stmt = stmt.where(model.is_active.is_(True))
    return stmt


async def get_scoped_or_none(
    db: AsyncSession, model, pk: int, *, team_id: int, active_only: bool = True
):
    stmt = scoped_select(model, team_id, active_only=active_only).where(model.id == pk)
    return (await db.execute(stmt)).scalars().first()


async def get_scoped(
    db: AsyncSession,
    model,
    pk: int,
    *,
    team_id: int,
    active_only: bool = True,
    message: Optional[str] = None,
):
    """Fetch ``model`` ``pk`` inside ``team_id`` or raise 404."""

    obj = await get_scoped_or_none(db, model, pk, team_id=team_id, active_only=active_only)
    if obj is None:
        raise NotFoundError(message or f"{_label(model)} not found")
    return obj


async def get_scoped_position(db: AsyncSession, position_id: int, *, team_id: int) -> DepthChartPosition:
    """Active position whose (active) chart belongs to ``team_id``."""

    stmt = (
        select(DepthChartPosition)
        .join(DepthChart, DepthChart.id == DepthChartPosition.depth_chart_id)
        .where(
            DepthChartPosition.id == position_id,
            DepthChartPosition.is_active.is_(True),
            DepthChart.team_id == team_id,
            DepthChart.is_active.is_(True),
        )
    )
    position = (await db.execute(stmt)).scalars().first()
    if position is None:
        raise NotFoundError("Position not found")
    return position


async def get_scoped_assignment(db: AsyncSession, assignment_id: int, *, team_id: int) -> DepthChartPlayer:
    stmt = (
        select(DepthChartPlayer)
        .join(DepthChartPosition, DepthChartPosition.id == DepthChartPlayer.position_id)
        .join(DepthChart, DepthChart.id == DepthChartPosition.depth_chart_id)
        .where(
            DepthChartPlayer.id == assignment_id,
            DepthChartPlayer.is_active.is_(True),
            DepthChart.team_id == team_id,
            DepthChart.is_active.is_(True),
        )
    )
    assignment = (await db.execute(stmt)).scalars().first()
    if assignment is None:
        raise NotFoundError("Assignment not found")
    return assignment


async def get_scoped_section(db: AsyncSession, section_id: int, *, team_id: int) -> ScheduleSection:
    stmt = (
        select(ScheduleSection)
        .join(Schedule, Schedule.id == ScheduleSection.schedule_id)
        .where(
            ScheduleSection.id == section_id,
            Schedule.team_id == team_id,
            Schedule.is_active.is_(True),
        )
    )
    section = (await db.execute(stmt)).scalars().first()
    if section is None:
        raise NotFoundError("Section not found")
    return section


async def get_scoped_activity(db: AsyncSession, activity_id: int, *, team_id: int) -> ScheduleActivity:
    stmt = (
        select(ScheduleActivity)
        .join(ScheduleSection, ScheduleSection.id == ScheduleActivity.section_id)
        .join(Schedule, Schedule.id == ScheduleSection.schedule_id)
        .where(
            ScheduleActivity.id == activity_id,
            Schedule.team_id == team_id,
            Schedule.is_active.is_(True),
        )
    )
    activity = (await db.execute(stmt)).scalars().first()
    if activity is None:
        raise NotFoundError("Activity not found")
    return activity


def scouting_reports_select(team_id: int) -> Select:
    return (
        select(ScoutingReport)
        .join(Player, Player.id == ScoutingReport.player_id)
        .where(Player.team_id == team_id)
    )


async def get_scoped_scouting_report(db: AsyncSession, report_id: int, *, team_id: int) -> ScoutingReport:
    stmt = scouting_reports_select(team_id).where(ScoutingReport.id == report_id)
    report = (await db.execute(stmt)).scalars().first()
    if report is None:
        raise NotFoundError("Scouting report not found")
    return report


def _label(model) -> str:
    # DepthChart -> "Depth chart", ScheduleTemplate -> "Schedule template"
    name = model.__name__
    words = []
    current = ""
    for ch in name:
        if ch.isupper() and current:
            words.append(current)
            current = ch
        else:
            current += ch
    words.append(current)
    return " ".join([words[0]] + [w.lower() for w in words[1:]])
