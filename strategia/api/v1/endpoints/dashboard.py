from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from strategia.api.deps import get_current_session, get_db, get_workspace
from strategia.services.auth_store import AuthState
from strategia.services.dashboard_service import DashboardService
from strategia.services.workspace import StrategyWorkspace
from strategia.templates.api import ApiResponseTemplate

router = APIRouter()


@router.get("/")
async def dashboard_overview(
    db: Session = Depends(get_db),
    state: AuthState = Depends(get_current_session),
    workspace: StrategyWorkspace = Depends(get_workspace),
) -> Dict:
    """Retorna métricas para el dashboard del proceso estratégico."""
    data = DashboardService.get_overview(db, state.user_id, workspace)
    return ApiResponseTemplate.success(
        data={
            "overview": data,
            "charts": {
                "process_steps": [
                    {"step": step, "done": done} for step, done in data["process_steps"].items()
                ],
            },
        },
        message="Dashboard updated",
    )
