import enum

from sqlalchemy import (
    Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint
)
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class PermissionType(str, enum.Enum):
    """Every grantable action. There is no hierarchy between members."""

    depth_chart_view = "depth_chart_view"
    depth_chart_create = "depth_chart_create"
    depth_chart_edit = "depth_chart_edit"
    depth_chart_delete = "depth_chart_delete"
    depth_chart_manage_positions = "depth_chart_manage_positions"
    player_assign = "player_assign"
    player_unassign = "player_unassign"
    schedule_view = "schedule_view"
    schedule_create = "schedule_create"
    schedule_edit = "schedule_edit"
    schedule_delete = "schedule_delete"
    reports_view = "reports_view"
    reports_create = "reports_create"
    reports_edit = "reports_edit"
    reports_delete = "reports_delete"
    team_settings = "team_settings"
    team_management = "team_management"
    user_management = "user_management"


class UserPermission(Base):
    """One explicit grant of ``permission_type`` to a user inside a team."""

    __tablename__ = "user_permissions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    permission_type = Column(
        Enum(PermissionType, name="permission_type", native_enum=False, length=40),
        nullable=False,
    )
    is_granted = Column(Boolean, nullable=False, default=True)
    expires_at = Column(DateTime, nullable=True)
    granted_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    notes = Column(String(500))
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", foreign_keys=[user_id], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("user_id", "team_id", "permission_type", name="uq_user_team_permission"),
    )
