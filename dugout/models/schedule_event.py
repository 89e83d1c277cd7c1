from sqlalchemy import (
    Column, Date, DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint
)
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


EVENT_TYPES = (
    "practice",
    "game",
    "scrimmage",
    "tournament",
    "meeting",
    "training",
    "conditioning",
    "team_building",
    "other",
)


class ScheduleEvent(Base):
    """A recurring calendar item built from a schedule template. Rows are hard-deleted."""

    __tablename__ = "schedule_events"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    schedule_template_id = Column(Integer, ForeignKey("schedule_templates.id"), nullable=False, index=True)
    location_id = Column(Integer, ForeignKey("locations.id"), index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    event_type = Column(String(20), nullable=False, default="practice")
    # HH:MM
    start_time = Column(String(5))
    end_time = Column(String(5))
    duration_minutes = Column(Integer)
    recurring_pattern = Column(JSON)
    required_equipment = Column(JSON)
    max_participants = Column(Integer)
    target_groups = Column(JSON)
    preparation_notes = Column(Text)
    priority = Column(String(10), nullable=False, default="medium")
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
    template = relationship("ScheduleTemplate", lazy="selectin")
    location = relationship("Location", foreign_keys=[location_id], lazy="selectin")
    dates = relationship(
        "ScheduleEventDate",
        back_populates="event",
        order_by="ScheduleEventDate.event_date",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class ScheduleEventDate(Base):
    __tablename__ = "schedule_event_dates"

    id = Column(Integer, primary_key=True, index=True)
    schedule_event_id = Column(
        Integer, ForeignKey("schedule_events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    event_date = Column(Date, nullable=False, index=True)
    start_time_override = Column(String(5))
    end_time_override = Column(String(5))
    location_id_override = Column(Integer, ForeignKey("locations.id"))
    notes = Column(Text)
    status = Column(String(12), nullable=False, default="scheduled")
    cancellation_reason = Column(String(200))
    weather_conditions = Column(String(100))
    attendance_count = Column(Integer)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    event = relationship("ScheduleEvent", back_populates="dates")
    override_location = relationship("Location", foreign_keys=[location_id_override], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("schedule_event_id", "event_date", name="uq_schedule_event_dates_event_date"),
    )
