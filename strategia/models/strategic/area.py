from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from strategia.models.base import BaseModel


class StrategicArea(BaseModel):
    __tablename__ = "strategic_areas"

    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    responsibilities = Column(JSON, nullable=False, default=list)

    organization = relationship("Organization", back_populates="strategic_areas")
    contributions = relationship(
        "StrategicContribution",
        back_populates="strategic_area",
        cascade="all, delete-orphan",
    )
