from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


class Report(Base):
    """User-defined report definition (sources, sections, filters, schedule)."""

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    type = Column(String(30), nullable=False)
    status = Column(String(10), nullable=False, default="draft")
    data_sources = Column(JSON, default=list)
    sections = Column(JSON, default=list)
    filters = Column(JSON, default=dict)
    schedule = Column(JSON)
    last_generated = Column(DateTime)
    generation_count = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
