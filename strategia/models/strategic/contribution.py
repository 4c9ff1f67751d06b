from sqlalchemy import JSON, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from strategia.models.base import BaseModel


class StrategicContribution(BaseModel):
    """Cómo un área aporta a una línea estratégica de la compañía."""
    __tablename__ = "strategic_contributions"

    area_id = Column(Integer, ForeignKey("strategic_areas.id"), nullable=False, index=True)
    strategic_line = Column(String(100), nullable=False)
    contribution = Column(Text, nullable=False)
    examples = Column(JSON, nullable=False, default=list)

    strategic_area = relationship("StrategicArea", back_populates="contributions")
