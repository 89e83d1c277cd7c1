from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class Game(Base):
    """A played or scheduled game. Rows are hard-deleted."""

    __tablename__ = "games"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    opponent = Column(String(100), nullable=False)
    game_date = Column(Date, nullable=False, index=True)
    home_away = Column(String(4), nullable=False)  # home | away
    team_score = Column(Integer)
    opponent_score = Column(Integer)
    result = Column(String(1))  # W | L | T
    location = Column(String(200))
    season = Column(String(20), index=True)
    notes = Column(Text)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
