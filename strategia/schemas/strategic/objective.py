from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from strategia.utils.text import split_lines


class ObjectiveCreate(BaseModel):
    title: str = Field(..., min_length=1, description="Objetivo")
    description: str = ""
    kpis: Union[List[str], str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Objective title is required")
        return v.strip()

    @field_validator("kpis")
    @classmethod
    def clean_kpis(cls, v) -> List[str]:
        return split_lines(v)


class SuggestionRequest(BaseModel):
    """Alcance de las contribuciones usadas para sugerir objetivos."""
    organization_id: Optional[int] = None
    area_id: Optional[int] = None


class SuggestionResponse(BaseModel):
    objective: str
    kpis: List[str]
    confidence_score: Optional[float] = None
