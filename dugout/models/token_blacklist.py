from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from dugout.database import Base, utcnow


class TokenBlacklist(Base):
    __tablename__ = "token_blacklist"

    id = Column(Integer, primary_key=True)
    jti = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime, nullable=False, index=True)
    revoked_at = Column(DateTime, nullable=False, default=utcnow)
    # logout | password_change | admin_revoke
    reason = Column(String(20), nullable=False, default="logout")
