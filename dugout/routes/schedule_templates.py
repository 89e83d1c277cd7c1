# dugout/routes/schedule_templates.py

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
from dugout.models.schedule_template import ScheduleTemplate
from dugout.models.user_permission import PermissionType
from dugout.permissions import require_permission
from dugout.schemas import (
    ScheduleTemplateCreate,
    ScheduleTemplateDuplicate,
    ScheduleTemplateRead,
    ScheduleTemplateUpdate,
)
from dugout.sorting import Page, pagination
from dugout.tenancy import get_scoped, scoped_select

router = APIRouter(tags=["Schedule templates"])

can_create = require_permission(PermissionType.schedule_create)
can_edit = require_permission(PermissionType.schedule_edit)
can_delete = require_permission(PermissionType.schedule_delete)


@router.get("")
async def list_templates(
    search: Optional[str] = Query(None, max_length=100),
    is_default: Optional[bool] = None,
    page: Page = Depends(pagination),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    stmt = scoped_select(ScheduleTemplate, user.team_id)
    stmt = apply_search(stmt, (ScheduleTemplate.name, ScheduleTemplate.description), search)
    if is_default is not None:
        stmt = stmt.where(ScheduleTemplate.is_default.is_(is_default))

    templates, meta = await paginate(
        db,
        stmt,
        page,
        order_by=(
            ScheduleTemplate.is_default.desc(),
            ScheduleTemplate.created_at.desc(),
            ScheduleTemplate.id.desc(),
        ),
    )
    return ok(serialize_many(ScheduleTemplateRead, templates), pagination=meta)


@router.get("/{template_id}")
async def get_template(
    template_id: int = Path(ge=1),
    user: Principal = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    template = await get_scoped(db, ScheduleTemplate, template_id, team_id=user.team_id)
    return ok(serialize(ScheduleTemplateRead, template))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_template(
    payload: ScheduleTemplateCreate,
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    template = await create_scoped(
        db,
        ScheduleTemplate,
        payload.model_dump(exclude_none=True),
        user,
        failure_message="Error creating schedule template",
        exclusive_default=True,
    )
    return ok(serialize(ScheduleTemplateRead, template), message="Schedule template created successfully")


@router.put("/{template_id}")
async def update_template(
    payload: ScheduleTemplateUpdate,
    template_id: int = Path(ge=1),
    user: Principal = Depends(can_edit),
    db: AsyncSession = Depends(get_db),
):
    template = await get_scoped(db, ScheduleTemplate, template_id, team_id=user.team_id)
    template = await update_scoped(
        db,
        template,
        payload.model_dump(exclude_unset=True),
        failure_message="Error updating schedule template",
        exclusive_default=True,
    )
    return ok(serialize(ScheduleTemplateRead, template), message="Schedule template updated successfully")


@router.delete("/{template_id}")
async def delete_template(
    template_id: int = Path(ge=1),
    user: Principal = Depends(can_delete),
    db: AsyncSession = Depends(get_db),
):
    template = await get_scoped(db, ScheduleTemplate, template_id, team_id=user.team_id)
    await soft_delete(db, template, failure_message="Error deleting schedule template")
    return ok(message="Schedule template deleted successfully")


@router.post("/{template_id}/duplicate", status_code=status.HTTP_201_CREATED)
async def duplicate_template(
    payload: Optional[ScheduleTemplateDuplicate] = None,
    template_id: int = Path(ge=1),
    user: Principal = Depends(can_create),
    db: AsyncSession = Depends(get_db),
):
    original = await get_scoped(db, ScheduleTemplate, template_id, team_id=user.team_id)
    payload = payload or ScheduleTemplateDuplicate()
    values = {
        "name": payload.name or f"{original.name} (Copy)",
        "description": payload.description or original.description,
        "template_data": dict(original.template_data or {}),
        "is_default": False,
    }
    template = await create_scoped(
        db, ScheduleTemplate, values, user, failure_message="Error duplicating schedule template"
    )
    return ok(serialize(ScheduleTemplateRead, template), message="Schedule template duplicated successfully")
