from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from dugout.database import Base, utcnow


VENDOR_TYPES = (
    "Equipment",
    "Apparel",
    "Technology",
    "Food Service",
    "Transportation",
    "Medical",
    "Facilities",
    "Other",
)
VENDOR_STATUSES = ("active", "inactive", "pending", "expired")


class Vendor(Base):
    """Supplier the program has a contract or relationship with. Rows are hard-deleted."""

    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    company_name = Column(String(200), nullable=False)
    contact_person = Column(String(100))
    email = Column(String(255))
    phone = Column(String(20))
    address = Column(Text)
    city = Column(String(100))
    state = Column(String(50))
    zip_code = Column(String(10))
    website = Column(String(255))
    vendor_type = Column(String(20), nullable=False)
    services_provided = Column(Text)
    contract_start_date = Column(Date)
    contract_end_date = Column(Date)
    contract_value = Column(Numeric(10, 2))
    payment_terms = Column(String(100))
    notes = Column(Text)
    last_contact_date = Column(Date)
    next_contact_date = Column(Date)
    contact_notes = Column(Text)
    status = Column(String(10), nullable=False, default="active")
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    creator = relationship("User", foreign_keys=[created_by], lazy="selectin")
