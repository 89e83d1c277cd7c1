from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


SCOUT_POSITIONS = ("Area Scout", "Cross Checker", "National Cross Checker", "Scouting Director")


class Scout(Base):
    """Professional scout contact. Rows are hard-deleted."""

    __tablename__ = "scouts"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    organization_name = Column(String(200), nullable=False)
    position = Column(String(30), nullable=False)
    phone = Column(String(20))
    email = Column(String(255))
    notes = Column(Text)
    last_contact_date = Column(Date)
    next_contact_date = Column(Date)
    contact_notes = Column(Text)
    status = Column(String(10), nullable=False, default="active")
    coverage_area = Column(String(500))
    specialization = Column(String(200))
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
