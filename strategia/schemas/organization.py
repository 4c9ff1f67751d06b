from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrganizationCreate(BaseModel):
    """Schema para crear una organización"""
    name: str = Field(..., min_length=2, max_length=100, description="Nombre de la organización")
    description: Optional[str] = Field(None, max_length=1000, description="Descripción")


class OrganizationResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    role: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
