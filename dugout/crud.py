"""Shared create/read/list/update/delete steps used by the resource routers.

The helpers never decide *who* may act; routers resolve the principal and
its permissions first and pass the team scope in explicitly.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from dugout.auth_token import Principal
from dugout.errors import ApiError, NotFoundError
from dugout.sorting import Page

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Envelope
# -------------------------------------------------------------------

def ok(data: Any = None, *, message: Optional[str] = None, pagination: Optional[dict] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    if pagination is not None:
        body["pagination"] = pagination
    return body


def serialize(schema, obj) -> dict:
    return schema.model_validate(obj).model_dump(mode="json")


def serialize_many(schema, objs: Iterable) -> List[dict]:
    return [serialize(schema, obj) for obj in objs]


# -------------------------------------------------------------------
# Reads
# -------------------------------------------------------------------

def apply_search(stmt, columns: Sequence, term: Optional[str]):
    """Case-insensitive substring match of ``term`` against any of ``columns``."""
    if not term:
        return stmt
    pattern = f"%{term}%"
    return stmt.where(or_(*(col.ilike(pattern) for col in columns)))


async def paginate(db: AsyncSession, stmt, page: Page, *, order_by: Sequence = ()) -> Tuple[list, dict]:
    total = (
        await db.execute(select(func.count()).select_from(stmt.order_by(None).subquery()))
    ).scalar_one()
    if order_by:
        stmt = stmt.order_by(*order_by)
    rows = (await db.execute(stmt.offset(page.offset).limit(page.limit))).scalars().all()
    return list(rows), page.meta(total)


async def reload(db: AsyncSession, model, pk: int):
    """Re-read a row after commit so server-computed columns and relationships are loaded."""
    stmt = select(model).where(model.id == pk).execution_options(populate_existing=True)
    obj = (await db.execute(stmt)).scalars().first()
    if obj is None:
        raise NotFoundError(f"{model.__name__} not found")
    return obj


# -------------------------------------------------------------------
# Writes
# -------------------------------------------------------------------

async def commit_or_fail(db: AsyncSession, failure_message: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(failure_message)
        raise ApiError(500, failure_message)


async def clear_default(db: AsyncSession, model, team_id: int, *, exclude_id: Optional[int] = None) -> None:
    """Unset ``is_default`` on every other row of ``model`` in the team (same transaction)."""
    stmt = (
        update(model)
        .where(model.team_id == team_id, model.is_default.is_(True))
        .values(is_default=False)
        .execution_options(synchronize_session=False)
    )
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    await db.execute(stmt)


async def create_scoped(
    db: AsyncSession,
    model,
    values: Dict[str, Any],
    principal: Principal,
    *,
    failure_message: str,
    exclusive_default: bool = False,
):
    """Insert a row owned by the principal's team; ``team_id``/``created_by`` never come from input."""

    values = {k: v for k, v in values.items() if k not in ("team_id", "created_by", "id")}
    obj = model(**values, team_id=principal.team_id, created_by=principal.id)
    try:
        if exclusive_default and values.get("is_default"):
            await clear_default(db, model, principal.team_id)
        db.add(obj)
        await db.flush()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(failure_message)
        raise ApiError(500, failure_message)
    await commit_or_fail(db, failure_message)
    return await reload(db, model, obj.id)


async def update_scoped(
    db: AsyncSession,
    obj,
    changes: Dict[str, Any],
    *,
    failure_message: str,
    exclusive_default: bool = False,
    bump_version: bool = False,
):
    """Apply a partial update; only keys present in ``changes`` are touched."""

    model = type(obj)
    changes = {k: v for k, v in changes.items() if k not in ("team_id", "created_by", "id", "version")}
    try:
        if exclusive_default and changes.get("is_default"):
            await clear_default(db, model, obj.team_id, exclude_id=obj.id)
        for key, value in changes.items():
            setattr(obj, key, value)
        if bump_version:
            obj.version = model.version + 1
        await db.flush()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(failure_message)
        raise ApiError(500, failure_message)
    await commit_or_fail(db, failure_message)
    return await reload(db, model, obj.id)


async def soft_delete(db: AsyncSession, obj, *, failure_message: str) -> None:
    obj.is_active = False
    await commit_or_fail(db, failure_message)


async def hard_delete(db: AsyncSession, obj, *, failure_message: str) -> None:
    await db.delete(obj)
    await commit_or_fail(db, failure_message)
