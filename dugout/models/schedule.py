from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


SECTION_TYPES = (
    "general",
    "position_players",
    "pitchers",
    "grinder_performance",
    "grinder_hitting",
    "grinder_defensive",
    "bullpen",
    "live_bp",
)


class Schedule(Base):
    """A dated practice plan: ordered sections, each with timed activities."""

    __tablename__ = "schedules"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    team_name = Column(String(100), nullable=False)
    program_name = Column(String(100), nullable=False)
    date = Column(Date, nullable=False, index=True)
    motto = Column(String(200))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
    sections = relationship(
        "ScheduleSection",
        back_populates="schedule",
        order_by="ScheduleSection.sort_order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class ScheduleSection(Base):
    """Block of a schedule. Hard-deleted together with its activities."""

    __tablename__ = "schedule_sections"

    id = Column(Integer, primary_key=True, index=True)
    schedule_id = Column(Integer, ForeignKey("schedules.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(30), nullable=False)
    title = Column(String(100), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    schedule = relationship("Schedule", back_populates="sections")
    activities = relationship(
        "ScheduleActivity",
        back_populates="section",
        order_by="ScheduleActivity.sort_order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class ScheduleActivity(Base):
    __tablename__ = "schedule_activities"

    id = Column(Integer, primary_key=True, index=True)
    section_id = Column(
        Integer, ForeignKey("schedule_sections.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # free text such as "3:15" or "3:15-3:30"
    time = Column(String(20), nullable=False)
    activity = Column(String(200), nullable=False)
    location = Column(String(100))
    staff = Column(String(100))
    group = Column(String(100))
    notes = Column(Text)
    sort_order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    section = relationship("ScheduleSection", back_populates="activities")
