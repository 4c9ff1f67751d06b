from typing import List

from pydantic import BaseModel, Field


class ActivityReport(BaseModel):
    """Eventos de entrada reportados por el navegador."""
    events: List[str] = Field(..., min_length=1, description="pointerdown, keypress, scroll o touchstart")
