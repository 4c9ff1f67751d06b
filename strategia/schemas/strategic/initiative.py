from datetime import date
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator


class InitiativeStatus(str, Enum):
    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class InitiativeCreate(BaseModel):
    """Formulario de iniciativa.

    Los campos obligatorios son opcionales aquí: el servicio los valida y
    responde 400 "Missing information".
    """
    objective_id: Optional[str] = None
    title: Optional[str] = None
    description: str = ""
    responsible_person: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: InitiativeStatus = InitiativeStatus.PLANNING
    actions: Union[List[str], str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v else v
