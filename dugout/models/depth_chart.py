from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String, Text
)
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class DepthChart(Base):
    __tablename__ = "depth_charts"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text)
    is_default = Column(Boolean, nullable=False, default=False)
    is_active = Column(Boolean, nullable=False, default=True)
    # bumped on every update; informational only, never compared
    version = Column(Integer, nullable=False, default=1)
    effective_date = Column(Date)
    notes = Column(Text)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
    positions = relationship(
        "DepthChartPosition",
        back_populates="depth_chart",
        order_by="DepthChartPosition.sort_order",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_depth_charts_team_default", "team_id", "is_default"),
    )


class DepthChartPosition(Base):
    __tablename__ = "depth_chart_positions"

    id = Column(Integer, primary_key=True, index=True)
    depth_chart_id = Column(
        Integer, ForeignKey("depth_charts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position_code = Column(String(10), nullable=False)
    position_name = Column(String(50), nullable=False)
    color = Column(String(7))
    icon = Column(String(50))
    sort_order = Column(Integer, nullable=False, default=0)
    max_players = Column(Integer)
    description = Column(String(500))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    depth_chart = relationship("DepthChart", back_populates="positions")
    players = relationship(
        "DepthChartPlayer",
        back_populates="position",
        order_by="DepthChartPlayer.depth_order",
        lazy="selectin",
    )


class DepthChartPlayer(Base):
    """A player's slot (``depth_order``) at one position of one chart."""

    __tablename__ = "depth_chart_players"

    id = Column(Integer, primary_key=True, index=True)
    depth_chart_id = Column(
        Integer, ForeignKey("depth_charts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    position_id = Column(
        Integer, ForeignKey("depth_chart_positions.id", ondelete="CASCADE"), nullable=False, index=True
    )
    player_id = Column(Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    depth_order = Column(Integer, nullable=False, default=1)
    notes = Column(String(500))
    assigned_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    assigned_at = Column(DateTime, default=utcnow)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    position = relationship("DepthChartPosition", back_populates="players")
    player = relationship("Player", lazy="selectin")
    assigned_by_user = relationship("User", foreign_keys=[assigned_by], lazy="selectin")
