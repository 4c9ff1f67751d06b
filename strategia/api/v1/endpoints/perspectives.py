from dataclasses import asdict
from typing import Dict

from fastapi import APIRouter, Depends, status

from strategia.api.deps import get_workspace
from strategia.schemas.strategic.perspective import PerspectiveCreate, TextEntry
from strategia.services.workspace import EXPERTS, StrategyWorkspace
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.get("/experts")
async def list_experts() -> Dict:
    return ApiResponseTemplate.success(
        data=[{"id": expert_id, "name": name} for expert_id, name in EXPERTS.items()],
        message="Experts",
    )


@router.get("/")
async def list_perspectives(workspace: StrategyWorkspace = Depends(get_workspace)) -> Dict:
    return ApiResponseTemplate.success(
        data=[dict(asdict(p), expert_name=p.expert_name) for p in workspace.perspectives],
        message="Perspectives",
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
async def add_perspective(
    data: PerspectiveCreate,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    perspective = workspace.add_perspective(data)
    return ApiResponseTemplate.success(
        data=dict(asdict(perspective), expert_name=perspective.expert_name),
        message="Perspective added",
    )


@router.get("/matrix")
async def perspective_matrix(workspace: StrategyWorkspace = Depends(get_workspace)) -> Dict:
    return ApiResponseTemplate.success(
        data=workspace.matrix(),
        message="Perspective matrix",
        metadata={"experts": EXPERTS},
    )


@router.get("/alternatives")
async def list_alternatives(workspace: StrategyWorkspace = Depends(get_workspace)) -> Dict:
    return ApiResponseTemplate.success(data=list(workspace.alternatives), message="Alternative strategies")


@router.post("/alternatives", status_code=status.HTTP_201_CREATED)
async def add_alternative(
    entry: TextEntry,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    text = workspace.add_alternative(entry.text)
    return ApiResponseTemplate.success(data=text, message="Alternative strategy added")


@router.get("/devils-advocate")
async def list_devils_points(workspace: StrategyWorkspace = Depends(get_workspace)) -> Dict:
    return ApiResponseTemplate.success(data=list(workspace.devils_advocate), message="Devil's advocate")


@router.post("/devils-advocate", status_code=status.HTTP_201_CREATED)
async def add_devils_point(
    entry: TextEntry,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    text = workspace.add_devils_point(entry.text)
    return ApiResponseTemplate.success(data=text, message="Devil's advocate point added")
