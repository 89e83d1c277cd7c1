from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


HS_COACH_POSITIONS = (
    "Head Coach",
    "Assistant Coach",
    "JV Coach",
    "Freshman Coach",
    "Pitching Coach",
    "Hitting Coach",
)
SCHOOL_CLASSIFICATIONS = ("1A", "2A", "3A", "4A", "5A", "6A", "Private")
RELATIONSHIP_TYPES = (
    "Recruiting Contact",
    "Former Player",
    "Coaching Connection",
    "Tournament Contact",
    "Camp Contact",
    "Other",
)


class HighSchoolCoach(Base):
    """High-school coach used as a recruiting pipeline. Rows are hard-deleted."""

    __tablename__ = "high_school_coaches"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    school_name = Column(String(200), nullable=False)
    school_district = Column(String(200))
    position = Column(String(20), nullable=False)
    phone = Column(String(20))
    email = Column(String(255))
    city = Column(String(100))
    state = Column(String(50))
    region = Column(String(100))
    years_coaching = Column(Integer)
    conference = Column(String(100))
    school_classification = Column(String(10))
    relationship_type = Column(String(30), nullable=False, default="Recruiting Contact")
    notes = Column(Text)
    last_contact_date = Column(Date)
    next_contact_date = Column(Date)
    contact_notes = Column(Text)
    players_sent_count = Column(Integer, nullable=False, default=0)
    status = Column(String(10), nullable=False, default="active")
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
