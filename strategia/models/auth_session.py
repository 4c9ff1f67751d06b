import enum
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from strategia.models.base import BaseModel


class RevokeReason(str, enum.Enum):
    SIGNED_OUT = "signed_out"
    IDLE_TIMEOUT = "idle_timeout"


class AuthSession(BaseModel):
    __tablename__ = "auth_sessions"

    token = Column(String(500), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)

    expires_at = Column(DateTime, nullable=False)
    revoked = Column(Boolean, default=False, nullable=False)
    revoked_at = Column(DateTime, nullable=True)
    revoke_reason = Column(Enum(RevokeReason), nullable=True)

    last_activity_at = Column(DateTime, nullable=True)

    user_agent = Column(Text, nullable=True)
    ip_address = Column(String(45), nullable=True)

    user = relationship("User", back_populates="sessions")

    def is_valid(self) -> bool:
        if self.revoked:
            return False
        if self.expires_at < datetime.utcnow():
            return False
        return True

    def revoke(self, reason: RevokeReason) -> None:
        self.revoked = True
        self.revoked_at = datetime.utcnow()
        self.revoke_reason = reason

    def record_activity(self) -> None:
        self.last_activity_at = datetime.utcnow()

    def __repr__(self) -> str:
        return f"<AuthSession(id={self.id}, user_id={self.user_id}, revoked={self.revoked})>"
