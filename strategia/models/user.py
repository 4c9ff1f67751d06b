import enum

from sqlalchemy import Column, Enum, String
from sqlalchemy.orm import relationship

from strategia.models.base import BaseModel


class AuthProvider(str, enum.Enum):
    """Origen de las credenciales del usuario"""
    EMAIL = "email"
    GOOGLE = "google"


class User(BaseModel):
    """Usuario y perfil; el perfil se consulta por id."""
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(200), nullable=False, default="")
    hashed_password = Column(String(255), nullable=True)
    auth_provider = Column(Enum(AuthProvider), default=AuthProvider.EMAIL, nullable=False)
    avatar_url = Column(String(500), nullable=True)

    sessions = relationship("AuthSession", back_populates="user", cascade="all, delete-orphan")
    memberships = relationship("UserOrganization", back_populates="user", cascade="all, delete-orphan")
    notifications = relationship(
        "Notification",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def verify_password(self, password: str) -> bool:
        from strategia.core.security import TokenUtils
        return TokenUtils.verify_password(password, self.hashed_password)

    def to_profile(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "auth_provider": self.auth_provider.value if self.auth_provider else None,
        }

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
