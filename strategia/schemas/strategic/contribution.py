from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from strategia.core.config import settings
from strategia.utils.text import split_lines


class ContributionSubmit(BaseModel):
    """Valores del formulario de contribución.

    ``area_id`` tiene prioridad; ``area`` (nombre) solo se usa para buscar el
    área dentro de la organización seleccionada cuando falta el ID.
    """
    organization_id: Optional[int] = None
    area_id: Optional[int] = None
    area: Optional[str] = None
    strategic_line: str = Field(..., description="Línea estratégica")
    contribution: str = Field(..., min_length=1, description="Cómo contribuye el área")
    examples: Union[List[str], str] = Field(default_factory=list)

    @field_validator("strategic_line")
    @classmethod
    def validate_strategic_line(cls, v: str) -> str:
        if v not in settings.STRATEGIC_LINES:
            raise ValueError(
                f"Strategic line must be one of: {', '.join(settings.STRATEGIC_LINES)}"
            )
        return v

    @field_validator("contribution")
    @classmethod
    def strip_contribution(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Contribution is required")
        return v.strip()

    @field_validator("examples")
    @classmethod
    def clean_examples(cls, v) -> List[str]:
        return split_lines(v)


class ContributionResponse(BaseModel):
    id: int
    area_id: int
    strategic_line: str
    contribution: str
    examples: List[str] = []

    model_config = ConfigDict(from_attributes=True)
