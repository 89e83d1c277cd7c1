"""Per-action permission checks.

Grants are explicit rows in ``user_permissions``; holding one permission never
implies another and there is no role-based bypass.
"""

import logging

from fastapi import Depends

from dugout.auth_token import Principal, get_current_user
from dugout.errors import AuthorizationError
from dugout.models.user_permission import PermissionType

logger = logging.getLogger(__name__)


def has_permission(principal: Principal, permission: PermissionType) -> bool:
    return permission in principal.permissions


def check_permission(principal: Principal, permission: PermissionType) -> None:
    """Raise 403 unless ``principal`` currently holds ``permission``."""

    if has_permission(principal, permission):
        return

    logger.warning(
        "Permission %s denied for user %s (team %s)",
        permission.value,
        principal.id,
        principal.team_id,
    )
    if permission in principal.expired_permissions:
        raise AuthorizationError("Permission has expired")
    raise AuthorizationError(f"Access denied. Required permission: {permission.value}")


def require_permission(permission: PermissionType):
    """Dependency factory: ``Depends(require_permission(PermissionType.schedule_edit))``."""

    async def dependency(user: Principal = Depends(get_current_user)) -> Principal:
        check_permission(user, permission)
        return user

    dependency.__name__ = f"require_{permission.value}"
    return dependency


ROLE_HEAD_COACH = "head_coach"
ROLE_SUPER_ADMIN = "super_admin"


def require_roles(*roles: str, message: str):
    """Dependency factory for the few endpoints gated by role instead of a grant."""

    async def dependency(user: Principal = Depends(get_current_user)) -> Principal:
        if user.role not in roles:
            logger.warning("Role %s denied for user %s", user.role, user.id)
            raise AuthorizationError(message)
        return user

    return dependency
