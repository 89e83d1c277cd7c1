from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


LOCATION_TYPES = (
    "field",
    "gym",
    "facility",
    "stadium",
    "practice_field",
    "batting_cage",
    "weight_room",
    "classroom",
    "other",
)


class Location(Base):
    """A venue the team plays or practises at. Rows are hard-deleted.

    ``is_active`` here is an availability flag the coaches toggle, not a
    soft-delete marker, so inactive venues stay readable.
    """

    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    name = Column(String(200), nullable=False)
    address = Column(String(500))
    city = Column(String(100))
    state = Column(String(50))
    zip_code = Column(String(20))
    location_type = Column(String(20), nullable=False, default="field")
    capacity = Column(Integer)
    notes = Column(Text)
    contact_info = Column(JSON)
    amenities = Column(JSON)
    is_active = Column(Boolean, nullable=False, default=True)
    is_home_venue = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")

    __table_args__ = (
        UniqueConstraint("team_id", "name", name="uq_locations_team_name"),
    )
