from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class Prospect(Base):
    __tablename__ = "prospects"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    primary_position = Column(String(4), nullable=False)
    secondary_position = Column(String(4))
    school_type = Column(String(12))
    school_name = Column(String(200))
    city = Column(String(100))
    state = Column(String(2))
    graduation_year = Column(Integer)
    class_year = Column(String(2))
    bats = Column(String(1))
    throws = Column(String(1))
    height = Column(String(10))
    weight = Column(Integer)
    email = Column(String(255))
    phone = Column(String(20))
    gpa = Column(Float)
    sat_score = Column(Integer)
    act_score = Column(Integer)
    fastball_velocity = Column(Integer)
    exit_velocity = Column(Integer)
    status = Column(String(12), nullable=False, default="identified")
    academic_eligibility = Column(String(10), nullable=False, default="unknown")
    notes = Column(Text)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
