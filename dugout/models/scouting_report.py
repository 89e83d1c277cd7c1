from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class ScoutingReport(Base):
    """Evaluation of a player. Has no ``team_id`` of its own: the tenant is the player's team."""

    __tablename__ = "scouting_reports"

    id = Column(Integer, primary_key=True, index=True)
    player_id = Column(Integer, ForeignKey("players.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    report_date = Column(Date, nullable=False)
    game_date = Column(Date)
    opponent = Column(String(100))
    event_type = Column(String(10), default="game")

    overall_grade = Column(String(2))
    hitting_grade = Column(String(2))
    pitching_grade = Column(String(2))
    fielding_grade = Column(String(2))
    speed_grade = Column(String(2))
    intangibles_grade = Column(String(2))
    projection = Column(String(12))

    hitting_notes = Column(Text)
    pitching_notes = Column(Text)
    fielding_notes = Column(Text)
    overall_notes = Column(Text)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    player = relationship("Player", lazy="selectin")
    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
