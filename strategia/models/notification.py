from datetime import datetime
import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from strategia.models.base import BaseModel


class NotificationVariant(str, enum.Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Aviso tipo toast pendiente de mostrar al usuario."""
    __tablename__ = "notifications"

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    session_id = Column(Integer, ForeignKey("auth_sessions.id"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    variant = Column(Enum(NotificationVariant), nullable=False, default=NotificationVariant.DEFAULT)
    delivered = Column(Boolean, default=False, nullable=False)
    delivered_at = Column(DateTime, nullable=True)

    user = relationship("User", back_populates="notifications")

    def mark_delivered(self) -> None:
        self.delivered = True
        self.delivered_at = datetime.utcnow()

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "variant": self.variant.value,
            "delivered": self.delivered,
            "created_at": self.created_at,
        }

    def __repr__(self) -> str:
        return f"<Notification(id={self.id}, user_id={self.user_id}, title='{self.title}')>"
