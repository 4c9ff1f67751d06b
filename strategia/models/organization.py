import enum

from sqlalchemy import Column, Enum, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from strategia.models.base import BaseModel


class MembershipRole(str, enum.Enum):
    ADMIN = "admin"
    MEMBER = "member"


class Organization(BaseModel):
    __tablename__ = "organizations"

    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)

    memberships = relationship("UserOrganization", back_populates="organization", cascade="all, delete-orphan")
    strategic_areas = relationship("StrategicArea", back_populates="organization", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name='{self.name}')>"


class UserOrganization(BaseModel):
    """Membresía de un usuario en una organización."""
    __tablename__ = "user_organizations"
    __table_args__ = (UniqueConstraint("user_id", "organization_id", name="uq_user_organization"),)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    role = Column(Enum(MembershipRole), default=MembershipRole.MEMBER, nullable=False)

    user = relationship("User", back_populates="memberships")
    organization = relationship("Organization", back_populates="memberships")
