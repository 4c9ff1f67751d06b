from dataclasses import asdict
from typing import Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from strategia.api.deps import get_current_session, get_db, get_services, get_workspace
from strategia.schemas.strategic.objective import ObjectiveCreate, SuggestionRequest, SuggestionResponse
from strategia.services.auth_store import AuthState
from strategia.services.container import ServiceContainer
from strategia.services.workspace import StrategyWorkspace
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.get("/")
async def list_objectives(workspace: StrategyWorkspace = Depends(get_workspace)) -> Dict:
    return ApiResponseTemplate.success(
        data=[asdict(o) for o in workspace.objectives],
        message="Objectives",
    )


@router.post("/", status_code=status.HTTP_201_CREATED)
async def add_objective(
    data: ObjectiveCreate,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    objective = workspace.add_objective(data)
    return ApiResponseTemplate.success(data=asdict(objective), message="Objective added")


@router.delete("/{objective_id}")
async def remove_objective(
    objective_id: str,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    objective = workspace.remove_objective(objective_id)
    return ApiResponseTemplate.success(data={"id": objective.id}, message="Objective removed")


@router.post("/suggestions")
async def suggest_objectives(
    scope: SuggestionRequest,
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    services: ServiceContainer = Depends(get_services),
) -> Dict:
    """Sugerencias de objetivos a partir de las contribuciones del alcance."""
    contributions = services.strategy.list_contributions(
        db, state.user_id, organization_id=scope.organization_id, area_id=scope.area_id
    )
    suggestions = services.suggestions.get_suggestions(contributions, user_id=state.user_id)
    return ApiResponseTemplate.success(
        data=[s.to_dict() for s in suggestions],
        message="Objective suggestions",
        metadata={"contributions": len(contributions)},
    )


@router.post("/from-suggestion", status_code=status.HTTP_201_CREATED)
async def apply_suggestion(
    suggestion: SuggestionResponse,
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    objective = workspace.add_objective(
        ObjectiveCreate(title=suggestion.objective, kpis=suggestion.kpis)
    )
    return ApiResponseTemplate.success(data=asdict(objective), message="Suggestion applied")
