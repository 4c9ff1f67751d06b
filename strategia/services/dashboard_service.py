from datetime import date
from typing import Optional

from sqlalchemy.orm import Session

from strategia.crud.strategic.area import strategic_area as area_crud
from strategia.crud.strategic.contribution import contribution as contribution_crud
from strategia.schemas.strategic.initiative import InitiativeStatus
from strategia.services.strategy_service import StrategyService
from strategia.services.workspace import StrategyWorkspace


def _percentage(part: int, total: int) -> float:
    return round(part * 100.0 / total, 2) if total else 0.0


class DashboardService:
    @staticmethod
    def get_overview(
        db: Session,
        user_id: int,
        workspace: StrategyWorkspace,
        today: Optional[date] = None,
    ) -> dict:
        today = today or date.today()
        organization_ids = StrategyService.organization_ids(db, user_id)
        areas = area_crud.get_by_organizations(db, organization_ids=organization_ids)
        contributions = contribution_crud.get_by_areas(db, area_ids=[a.id for a in areas])

        steps = {
            "contributions": bool(contributions),
            "objectives": bool(workspace.objectives),
            "initiatives": bool(workspace.initiatives),
            "perspectives": bool(workspace.perspectives),
        }

        initiatives = workspace.initiatives
        completed = [i for i in initiatives if i.status == InitiativeStatus.COMPLETED]
        upcoming = []
        for initiative in initiatives:
            if initiative.status == InitiativeStatus.COMPLETED or initiative.end_date < today:
                continue
            upcoming.append({
                "id": initiative.id,
                "title": initiative.title,
                "end_date": initiative.end_date,
                "status": initiative.status.value,
                "days_remaining": (initiative.end_date - today).days,
            })

        return {
            "organizations": len(organization_ids),
            "strategic_areas": len(areas),
            "contributions": len(contributions),
            "objectives": len(workspace.objectives),
            "initiatives": len(initiatives),
            "process_steps": steps,
            "process_completion": _percentage(sum(steps.values()), len(steps)),
            "initiative_progress": _percentage(len(completed), len(initiatives)),
            "upcoming_deadlines": sorted(upcoming, key=lambda x: x["days_remaining"])[:5],
        }
