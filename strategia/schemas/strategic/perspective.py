from typing import Optional

from pydantic import BaseModel, Field


class PerspectiveCreate(BaseModel):
    initiative_id: Optional[str] = None
    expert_id: Optional[str] = None
    argument: Optional[str] = None


class TextEntry(BaseModel):
    """Estrategia alternativa o punto de abogado del diablo."""
    text: str = ""


class PlanningDraftCreate(BaseModel):
    """Formulario de arranque rápido (empresa + área + líneas)."""
    company_name: str = Field(..., min_length=2, max_length=100)
    area_name: str = Field(..., min_length=2, max_length=100)
    area_responsibilities: str = Field(..., min_length=10)
    strategic_line_1: str = Field(..., min_length=5)
    strategic_line_2: Optional[str] = None
