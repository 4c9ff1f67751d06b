from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from strategia.utils.text import split_lines


class StrategicAreaCreate(BaseModel):
    """Área estratégica; las responsabilidades llegan como lista o una por línea."""
    name: str = Field(..., min_length=2, max_length=100, description="Nombre del área")
    organization_id: Optional[int] = Field(None, description="ID de la organización")
    organization_name: Optional[str] = Field(
        None, description="Nombre de la organización (solo si no se envía el ID)"
    )
    description: Optional[str] = None
    responsibilities: Union[List[str], str] = Field(..., description="Una responsabilidad por línea")

    @field_validator("responsibilities")
    @classmethod
    def clean_responsibilities(cls, v):
        lines = split_lines(v)
        if not lines:
            raise ValueError("Add at least one responsibility.")
        return lines

    @model_validator(mode="after")
    def require_organization(self):
        if self.organization_id is None and not (self.organization_name or "").strip():
            raise ValueError("Please select an organization.")
        return self


class StrategicAreaResponse(BaseModel):
    id: int
    name: str
    organization_id: int
    organization_name: Optional[str] = None
    description: Optional[str] = None
    responsibilities: List[str] = []

    model_config = ConfigDict(from_attributes=True)
