from sqlalchemy import (
    Boolean, Column, Date, DateTime, Float, ForeignKey, Index, Integer, String, Text
)
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)

    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    school_type = Column(String(4), nullable=False)  # HS | COLL
    position = Column(String(4), nullable=False)
    height = Column(String(10))
    weight = Column(Integer)
    birth_date = Column(Date)
    graduation_year = Column(Integer)
    school = Column(String(100))
    city = Column(String(100))
    state = Column(String(2))
    phone = Column(String(15))
    email = Column(String(255))

    # batting
    batting_avg = Column(Float)
    home_runs = Column(Integer)
    rbi = Column(Integer)
    stolen_bases = Column(Integer)
    # pitching
    era = Column(Float)
    wins = Column(Integer)
    losses = Column(Integer)
    strikeouts = Column(Integer)
    innings_pitched = Column(Float)

    has_medical_issues = Column(Boolean, nullable=False, default=False)
    injury_details = Column(Text)
    has_comparison = Column(Boolean, nullable=False, default=False)
    comparison_player = Column(String(100))

    status = Column(String(12), nullable=False, default="active")
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")

    __table_args__ = (
        Index("ix_players_team_status", "team_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Player id={self.id} team={self.team_id} {self.first_name} {self.last_name} ({self.position})>"
