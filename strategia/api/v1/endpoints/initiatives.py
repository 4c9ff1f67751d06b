from dataclasses import asdict
from typing import Dict

from fastapi import APIRouter, Depends, status

from strategia.api.deps import get_workspace
from strategia.schemas.strategic.initiative import InitiativeCreate
from strategia.services.workspace import StrategyWorkspace
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.get("/")
async def list_initiatives(workspace: StrategyWorkspace = Depends(get_workspace)) -> Dict:
    return ApiResponseTemplate.success(
        data=workspace.initiatives_with_objectives(),
        message="Initiatives",
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
async def add_initiative(
    data: InitiativeCreate,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    initiative = workspace.add_initiative(data)
    return ApiResponseTemplate.success(data=asdict(initiative), message="Initiative added")
