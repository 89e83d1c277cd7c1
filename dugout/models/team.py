from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False)
    program_name = Column(String(100))
    conference = Column(String(100))
    division = Column(String(10))
    city = Column(String(50))
    state = Column(String(2))
    primary_color = Column(String(7))
    secondary_color = Column(String(7))
    school_logo_url = Column(String(500))
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    members = relationship("User", back_populates="team", foreign_keys="User.team_id")
